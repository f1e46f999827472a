"""
Tests for the vantage command-line tool.
"""

import io
import json


def _run(monkeypatch, text, argv=()):
    from vantage.cli import main

    monkeypatch.setattr("sys.stdin", io.StringIO(text))
    return main(list(argv))


class TestMain:
    """Tests for vantage.cli.main."""

    def test_single_cell(self, monkeypatch, capsys):
        """One cell, one probe."""
        status = _run(monkeypatch, "1 1\n5\n1\n1\n")

        out = capsys.readouterr().out
        assert status == 0
        assert out == "1 5 5\n"

    def test_two_cells(self, monkeypatch, capsys):
        """Low seat wins the placed-altitude tie-break."""
        status = _run(monkeypatch, "1 2\n1 100\n1\n10\n")

        assert status == 0
        assert capsys.readouterr().out.strip() == "2 101 1"

    def test_no_prune_same_output(self, monkeypatch, capsys):
        """Disabling pruning prints the same line."""
        text = "3 3\n5 1 9\n2 8 3\n7 4 6\n2\n2 1\n"

        _run(monkeypatch, text)
        pruned = capsys.readouterr().out
        _run(monkeypatch, text, ["--no-prune"])
        exhaustive = capsys.readouterr().out

        assert pruned == exhaustive
        assert len(pruned.split()) == 3

    def test_input_file(self, tmp_path, capsys):
        """--input reads the problem from a file."""
        from vantage.cli import main

        path = tmp_path / "problem.txt"
        path.write_text("1 2\n1 100\n1\n10\n")

        assert main(["--input", str(path)]) == 0
        assert capsys.readouterr().out.strip() == "2 101 1"

    def test_missing_input_file(self, tmp_path, capsys):
        """Unreadable input is an input error."""
        from vantage.cli import main

        status = main(["--input", str(tmp_path / "missing.txt")])

        assert status == 2
        assert capsys.readouterr().out == ""

    def test_format_error(self, monkeypatch, capsys):
        """Malformed input exits non-zero and names the stage."""
        status = _run(monkeypatch, "2 2\n1 2\n3\n1\n1\n")

        captured = capsys.readouterr()
        assert status == 2
        assert captured.out == ""
        assert "matrix row 2" in captured.err

    def test_capacity_error(self, monkeypatch, capsys):
        """Oversized grids exit with the capacity status."""
        status = _run(monkeypatch, "9 9\n")

        captured = capsys.readouterr()
        assert status == 3
        assert "dimensions" in captured.err

    def test_too_many_probes_for_cells(self, monkeypatch, capsys):
        """Probes must fit on distinct cells."""
        status = _run(monkeypatch, "1 1\n5\n2\n1 1\n")

        assert status == 3
        assert "probes" in capsys.readouterr().err

    def test_config_file(self, monkeypatch, tmp_path, capsys):
        """Limits come from the configuration file."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"solver": {"max_probes": 1}}))

        status = _run(monkeypatch, "1 2\n1 100\n2\n1 1\n", ["--config", str(config_path)])

        assert status == 3

    def test_bad_config(self, monkeypatch, tmp_path, capsys):
        """Invalid configuration is reported before reading input."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"log_level": "LOUD"}))

        status = _run(monkeypatch, "1 1\n5\n1\n1\n", ["--config", str(config_path)])

        assert status == 2
        assert "configuration" in capsys.readouterr().err

    def test_malformed_yaml_config(self, monkeypatch, tmp_path, capsys):
        """Unparseable YAML is a configuration error, not a crash."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("solver: [unclosed\n")

        status = _run(monkeypatch, "1 1\n5\n1\n1\n", ["--config", str(config_path)])

        captured = capsys.readouterr()
        assert status == 2
        assert captured.out == ""
        assert "configuration" in captured.err

    def test_numeric_log_level_config(self, monkeypatch, tmp_path, capsys):
        """A log level given as a number is rejected cleanly."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("log_level: 10\n")

        status = _run(monkeypatch, "1 1\n5\n1\n1\n", ["--config", str(config_path)])

        assert status == 2
        assert "log_level" in capsys.readouterr().err

    def test_non_mapping_config(self, monkeypatch, tmp_path, capsys):
        """A config file must hold a mapping."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- prune\n- verbose\n")

        status = _run(monkeypatch, "1 1\n5\n1\n1\n", ["--config", str(config_path)])

        assert status == 2
        assert "configuration" in capsys.readouterr().err

    def test_plot(self, monkeypatch, tmp_path, capsys):
        """--plot writes a figure next to the result line."""
        import matplotlib
        matplotlib.use('Agg')

        output = tmp_path / "placement.png"
        status = _run(monkeypatch, "2 2\n1 2\n3 4\n1\n1\n", ["--plot", str(output)])

        assert status == 0
        assert output.exists()
        assert capsys.readouterr().out.count("\n") == 1

    def test_build_parser(self):
        """Parser exposes the documented flags."""
        from vantage.cli import build_parser

        args = build_parser().parse_args(["-i", "p.txt", "--no-prune", "-v"])

        assert args.input == "p.txt"
        assert args.no_prune
        assert args.verbose
        assert args.plot is None
