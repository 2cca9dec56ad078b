"""End-to-end tests for the command line."""

import logging

import pytest

from svddoc.__main__ import build_parser, main


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestArguments:
    """Tests for argument parsing."""

    def test_input_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_output_default(self):
        args = build_parser().parse_args(["-i", "chip.svd"])
        assert str(args.output) == "output"
        assert args.log_level == "INFO"
        assert not args.quiet


class TestMain:
    """Tests for complete runs."""

    def test_writes_pages(self, demo_svd, tmp_path):
        out = tmp_path / "docs" / "html"
        assert main(["-i", str(demo_svd), "-o", str(out), "--quiet"]) == 0
        assert sorted(p.name for p in out.iterdir()) == [
            "GPIOA.html",
            "TIM1.html",
            "TIM8.html",
            "index.html",
        ]
        tim8 = (out / "TIM8.html").read_text(encoding="utf-8")
        assert "<h1>TIM8 (Base 0x40013400)</h1>" in tim8
        assert "Absolute 0x40013400" in tim8

    def test_parse_failure(self, tmp_path):
        bad = tmp_path / "bad.svd"
        bad.write_text("<device>")
        out = tmp_path / "out"
        assert main(["-i", str(bad), "-o", str(out), "--quiet"]) == 1
        assert not out.exists()

    def test_missing_input(self, tmp_path):
        assert main(["-i", str(tmp_path / "nope.svd"), "-o", str(tmp_path / "out"), "--quiet"]) == 1

    def test_output_is_a_file(self, demo_svd, tmp_path):
        blocker = tmp_path / "taken"
        blocker.write_text("")
        assert main(["-i", str(demo_svd), "-o", str(blocker), "--quiet"]) == 1

    def test_wide_register_still_documented(self, tmp_path):
        """Test that fields above bit 31 do not abort the run."""
        svd = tmp_path / "wide.svd"
        svd.write_text(
            "<device><name>W</name><peripherals><peripheral><name>DMA</name>"
            "<baseAddress>0x40020000</baseAddress><registers>"
            "<register><name>R64</name><addressOffset>0x8</addressOffset><size>64</size><fields>"
            "<field><name>LOW</name><bitOffset>0</bitOffset><bitWidth>8</bitWidth></field>"
            "<field><name>HIGH</name><bitOffset>40</bitOffset><bitWidth>4</bitWidth></field>"
            "</fields></register></registers></peripheral></peripherals></device>"
        )
        out = tmp_path / "out"
        assert main(["-i", str(svd), "-o", str(out), "--quiet"]) == 0
        page = (out / "DMA.html").read_text(encoding="utf-8")
        assert "<b>LOW</b>" in page
        assert "<b>HIGH</b>" not in page
        assert '<td colspan="24">31 - 8</td>' in page
