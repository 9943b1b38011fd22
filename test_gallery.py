#!/usr/bin/env python3
"""
Test script for the gallery registry, YAML config, image export and CLI.
"""

import sys
import tempfile
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pandas as pd

# Add the current directory to Python path
sys.path.insert(0, str(Path(__file__).parent))

from chartgallery.config import DEFAULT_CONFIG_PATH, GalleryConfig, load_config
from chartgallery.export import save_figure
from chartgallery.charts import plot_ridgeline
from chartgallery.gallery import (
    DEFAULT_SECTIONS,
    ChartGallery,
    GallerySection,
    build_default_gallery,
    main,
)


EXPECTED_SECTIONS = [
    'strip', 'bean', 'density', 'ridgeline', 'annotation',
    'facet_bar', 'facet_step', 'facet_area', 'dumbbell', 'lollipop', 'calendar',
]


def _broken(config):
    raise RuntimeError("boom")


def test_config_loading():
    cfg = load_config(DEFAULT_CONFIG_PATH)
    assert cfg.formats == ['png']
    assert cfg.figsize == (10, 6)
    assert cfg.game_logs_dir is None

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / 'cfg.yaml'
        path.write_text("dpi: 72\nformats: svg\nrolling_window: 3\n")
        cfg = load_config(path)
        assert cfg.dpi == 72 and cfg.formats == ['svg'] and cfg.rolling_window == 3

        path.write_text("colour: red\n")
        try:
            load_config(path)
        except ValueError as e:
            assert 'colour' in str(e)
        else:
            raise AssertionError("expected ValueError for an unknown key")

        path.write_text("rolling_window: 0\n")
        try:
            load_config(path)
        except ValueError:
            pass
        else:
            raise AssertionError("expected ValueError for rolling_window=0")

        try:
            load_config(Path(tmp) / 'missing.yaml')
        except FileNotFoundError:
            pass
        else:
            raise AssertionError("expected FileNotFoundError")

    overridden = GalleryConfig().with_overrides(dpi=50, output_dir=None)
    assert overridden.dpi == 50 and overridden.output_dir == 'gallery_out'


def test_save_figure_formats():
    with tempfile.TemporaryDirectory() as tmp:
        fig, ax = plt.subplots()
        ax.plot([0, 1], [1, 0])
        written = save_figure(fig, Path(tmp) / 'nested' / 'line', formats=['png', 'svg'], dpi=50, verbose=False)
        assert [p.suffix for p in written] == ['.png', '.svg']
        assert all(p.exists() and p.stat().st_size > 0 for p in written)
        assert not plt.fignum_exists(fig.number)

        fig, _ = plt.subplots()
        written = save_figure(fig, Path(tmp) / 'plain', verbose=False)
        assert written == [Path(tmp) / 'plain.png']

        fig, _ = plt.subplots()
        try:
            save_figure(fig, Path(tmp) / 'bad', formats=['docx'], verbose=False)
        except ValueError:
            pass
        else:
            raise AssertionError("expected ValueError for an unsupported format")
        assert not (Path(tmp) / 'bad.docx').exists()
        # rejected formats still honour close=True
        assert not plt.fignum_exists(fig.number)

        fig, _ = plt.subplots()
        try:
            save_figure(fig, Path(tmp) / 'bad', formats=['docx'], close=False, verbose=False)
        except ValueError:
            pass
        assert plt.fignum_exists(fig.number)
        plt.close(fig)


def test_default_gallery_registry():
    gallery = build_default_gallery(GalleryConfig())
    assert gallery.section_names() == EXPECTED_SECTIONS
    assert [s.name for s in DEFAULT_SECTIONS] == EXPECTED_SECTIONS

    try:
        gallery.register_section(GallerySection('strip', 'again', _broken))
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError for a duplicate section")

    try:
        gallery.build('nope')
    except KeyError:
        pass
    else:
        raise AssertionError("expected KeyError for an unknown section")


def test_render_every_section():
    """Every registered section renders to a file from the bundled data."""
    plt.close('all')
    with tempfile.TemporaryDirectory() as tmp:
        gallery = build_default_gallery(GalleryConfig(output_dir=tmp, dpi=40))
        results = gallery.render_all()
        assert gallery.failures == {}
        assert list(results) == EXPECTED_SECTIONS
        for name, paths in results.items():
            assert paths == [Path(tmp) / f"{name}.png"]
            assert paths[0].stat().st_size > 0
        assert plt.get_fignums() == []


def test_render_all_keeps_going():
    with tempfile.TemporaryDirectory() as tmp:
        gallery = ChartGallery(GalleryConfig(output_dir=tmp, dpi=40))
        gallery.register_section(DEFAULT_SECTIONS[0])
        gallery.register_section(GallerySection('broken', 'Broken', _broken))
        results = gallery.render_all()
        assert list(results) == ['strip']
        assert gallery.failures == {'broken': 'boom'}


def _constant_ridgeline(config):
    flat = pd.DataFrame({'g': ['a', 'a', 'b', 'b'], 'v': [1.0, 1.0, 2.0, 2.0]})
    return plot_ridgeline(flat, x='v', by='g')


def test_failed_section_leaves_no_open_figures():
    """A builder that fails after opening its figure does not leak it."""
    plt.close('all')
    with tempfile.TemporaryDirectory() as tmp:
        gallery = ChartGallery(GalleryConfig(output_dir=tmp, dpi=40))
        gallery.register_section(GallerySection('ridge', 'Flat ridgeline', _constant_ridgeline))
        gallery.register_section(DEFAULT_SECTIONS[0])
        results = gallery.render_all()
        assert list(results) == ['strip']
        assert 'enough distinct values' in gallery.failures['ridge']
        assert plt.get_fignums() == []

        kept, _ = plt.subplots()
        try:
            gallery.render('ridge')
        except ValueError:
            pass
        else:
            raise AssertionError("expected ValueError from the flat ridgeline")
        # figures opened before the section are left alone
        assert plt.get_fignums() == [kept.number]
        plt.close(kept)


def test_cli():
    with tempfile.TemporaryDirectory() as tmp:
        assert main(['--list']) == 0

        code = main(['--output_dir', tmp, '--sections', 'lollipop', 'dumbbell',
                     '--format', 'png', 'svg', '--dpi', '40'])
        assert code == 0
        names = sorted(p.name for p in Path(tmp).iterdir())
        assert names == ['dumbbell.png', 'dumbbell.svg', 'lollipop.png', 'lollipop.svg']

        assert main(['--output_dir', tmp, '--sections', 'unknown']) == 1
        assert main(['--config', str(Path(tmp) / 'missing.yaml')]) == 1
        assert main(['--output_dir', tmp, '--sections', 'calendar',
                     '--data_path', str(Path(tmp) / 'no_logs')]) == 1


def main_tests():
    """Run gallery tests."""
    tests = [
        test_config_loading,
        test_save_figure_formats,
        test_default_gallery_registry,
        test_render_every_section,
        test_render_all_keeps_going,
        test_failed_section_leaves_no_open_figures,
        test_cli,
    ]
    for test in tests:
        test()
        print(f"✓ {test.__name__}")
    print("\nGallery tests passed!")


if __name__ == "__main__":
    main_tests()
