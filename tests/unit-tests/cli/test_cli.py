import sys
import json
import pytest
from fwf_reader.cli import main
from fwf_reader.config import ReaderConfig

class DummyIngestor:
    calls = []
    def __init__(self, config, encodings=None, chunk_size=50_000, compression="snappy"):
        self.config = config
        self.encodings = encodings
        self.chunk_size = chunk_size
    def run(self, source, dest):
        DummyIngestor.calls.append((self.config, self.encodings, self.chunk_size, source, dest))
        return {"read": 0, "kept": 0, "rejected": 0}

@pytest.fixture(autouse=True)
def patch_ingestor(monkeypatch):
    DummyIngestor.calls = []
    monkeypatch.setattr('fwf_reader.cli.Ingestor', DummyIngestor)

def run_cli(monkeypatch, args):
    monkeypatch.setattr(sys, 'argv', ['fwf-reader'] + args)
    with pytest.raises(SystemExit) as e:
        main()
    return e.value.code

def test_cli_ingest_with_widths(monkeypatch, capsys):
    code = run_cli(monkeypatch, ['ingest', 'source.txt', '--dest', 'out', '--widths', '3', '3', '3',
                                 '--separator-length', '0', '--strict', '--no-header', '--chunk-size', '10'])
    assert code == 0
    config, encodings, chunk_size, source, dest = DummyIngestor.calls[0]
    assert config == ReaderConfig(widths=(3, 3, 3), separator_length=0, flexible_width=False, has_header=False)
    assert encodings is None
    assert chunk_size == 10
    assert (source, dest) == ('source.txt', 'out')
    assert json.loads(capsys.readouterr().out) == {"read": 0, "kept": 0, "rejected": 0}

def test_cli_ingest_with_layout(monkeypatch, data_dir):
    layout = str(data_dir / "separatorfwf" / "separator_fwf1.json")
    assert run_cli(monkeypatch, ['ingest', 'source.txt', '--dest', 'out', '--layout', layout, '--encoding', 'latin-1']) == 0
    config, encodings, _, _, _ = DummyIngestor.calls[0]
    assert config.names == ("a", "b", "c")
    assert config.separator_length == 1
    assert encodings == ['latin-1']

@pytest.mark.parametrize('args', [
    [],
    ['ingest'],
    ['ingest', 'source.txt'],
    ['ingest', 'source.txt', '--dest', 'out'],
    ['ingest', 'source.txt', '--widths', '3'],
    ['ingest', 'source.txt', '--dest', 'out', '--widths', '3', '--layout', 'l.json'],
    ['dump', 'source.txt'],
])
def test_cli_missing_args(monkeypatch, args):
    assert run_cli(monkeypatch, args) == 2

def test_cli_help(monkeypatch, capsys):
    assert run_cli(monkeypatch, ['--help']) == 0
    out = capsys.readouterr().out
    assert 'usage:' in out
    assert 'ingest' in out
    assert 'dump' in out

def test_cli_invalid_layout_file(monkeypatch):
    monkeypatch.setattr(sys, 'argv', ['fwf-reader', 'dump', 'source.txt', '--layout', 'nonexistent.json'])
    with pytest.raises(FileNotFoundError):
        main()

def test_cli_invalid_layout_json(monkeypatch, tmp_path):
    p = tmp_path / "layout.json"
    p.write_text('{invalid json}', encoding="utf-8")
    monkeypatch.setattr(sys, 'argv', ['fwf-reader', 'dump', 'source.txt', '--layout', str(p)])
    with pytest.raises(json.JSONDecodeError):
        main()

def test_cli_dump(monkeypatch, capsys, write_fwf):
    src = write_fwf("AAABBB\n123456\n12\n")
    code = run_cli(monkeypatch, ['dump', src, '--widths', '3', '3', '--separator-length', '0', '--strict'])
    assert code == 1
    captured = capsys.readouterr()
    out = [json.loads(l) for l in captured.out.splitlines()]
    assert out == [{"header": ["AAA", "BBB"]}, {"AAA": "123", "BBB": "456"}]
    assert "line 3:" in captured.err

def test_cli_dump_all_good(monkeypatch, capsys, write_fwf):
    src = write_fwf("123456\n")
    assert run_cli(monkeypatch, ['dump', src, '--widths', '3', '3', '--separator-length', '0', '--no-header']) == 0
    assert json.loads(capsys.readouterr().out) == {"col_1": "123", "col_2": "456"}

def test_cli_unreadable_source(monkeypatch, tmp_path):
    assert run_cli(monkeypatch, ['dump', str(tmp_path / 'missing.txt'), '--widths', '3']) == 2

def test_cli_dump_stops_when_source_fails(monkeypatch, capsys):
    class FailingLines:
        pulls = 0
        def __iter__(self):
            return self
        def __next__(self):
            FailingLines.pulls += 1
            raise OSError("Input/output error")
        def close(self):
            pass
    monkeypatch.setattr('fwf_reader.stream.open_line_source', lambda path, encodings=None: FailingLines())
    assert run_cli(monkeypatch, ['dump', 'dead.txt', '--widths', '3', '--no-header']) == 2
    assert FailingLines.pulls == 1
    assert "line 1:" in capsys.readouterr().err

@pytest.mark.parametrize('args', [
    ['dump', 'source.txt', '--widths', '0'],
    ['dump', 'source.txt', '--widths', '3', '-2'],
    ['dump', 'source.txt', '--widths', '3', '--separator-length', '-1'],
    ['dump', 'source.txt', '--widths', 'x'],
    ['ingest', 'source.txt', '--dest', 'out', '--widths', '3', '--chunk-size', '0'],
])
def test_cli_invalid_numbers_are_usage_errors(monkeypatch, capsys, args):
    assert run_cli(monkeypatch, args) == 2
    assert 'usage:' in capsys.readouterr().err
