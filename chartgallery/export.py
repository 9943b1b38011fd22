# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

import matplotlib.pyplot as plt
from pathlib import Path
from typing import List, Optional, Sequence, Union


def save_figure(fig,
                save_path: Union[str, Path],
                formats: Optional[Sequence[str]] = None,
                dpi: int = 300,
                close: bool = True,
                verbose: bool = True) -> List[Path]:
    """
    Write a figure to disk in one or more image formats.

    Args:
        fig: Matplotlib figure to save
        save_path: Target file; its suffix is replaced by each entry of `formats`
        formats: Image formats such as 'png', 'svg' or 'pdf'. Defaults to the
            suffix of `save_path`, or png when it has none
        dpi: Resolution for raster formats
        close: Close the figure after saving, or when the formats are rejected
        verbose: Print each written path

    Returns:
        Paths of the written files
    """
    save_path = Path(save_path)
    if formats is None:
        formats = [save_path.suffix.lstrip('.') or 'png']
    formats = [f.lower().lstrip('.') for f in formats]

    supported = fig.canvas.get_supported_filetypes()
    unsupported = [f for f in formats if f not in supported]
    if unsupported:
        if close:
            plt.close(fig)
        raise ValueError(
            f"Unsupported image format(s): {', '.join(unsupported)}; "
            f"expected one of {', '.join(sorted(supported))}"
        )

    save_path.parent.mkdir(parents=True, exist_ok=True)
    written = []
    for fmt in formats:
        out = save_path.with_suffix(f".{fmt}")
        fig.savefig(out, dpi=dpi, bbox_inches='tight', format=fmt)
        written.append(out)
        if verbose:
            print(f"Plot saved to {out}")

    if close:
        plt.close(fig)
    return written
