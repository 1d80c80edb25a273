# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import io
import sys
import typing
import pytest
import ruamel.yaml
import blechunk._cli


def _run(capsys: typing.Any, *args: str) -> typing.Tuple[int, str]:
    """
    Runs the command line tool in-process and returns the exit code with the captured stdout.
    The captured stderr is echoed back so that the caller may inspect it with capsys.
    """
    with pytest.raises(SystemExit) as ex_info:
        blechunk._cli.main(list(args))
    captured = capsys.readouterr()
    sys.stderr.write(captured.err)
    return int(ex_info.value.code or 0), captured.out


def _load(text: str) -> typing.Any:
    return ruamel.yaml.YAML(typ="safe").load(text)


def _unittest_split(capsys: typing.Any) -> None:
    code, out = _run(capsys, "split", "--text", "Hello, world!", "--chunk-size", "5")
    assert code == 0
    assert _load(out) == [
        {"flag": "first", "size": 5, "hex": "4548656c6c6f"},
        {"flag": "middle", "size": 5, "hex": "052c20776f72"},
        {"flag": "last", "size": 3, "hex": "836c6421"},
    ]

    code, out = _run(capsys, "split", "aa" * 37, "-S", "20")
    assert code == 0
    assert [x["hex"][:2] for x in _load(out)] == ["54", "91"]

    code, out = _run(capsys, "chunk", "aa" * 37)  # Default MTU of 20 bytes.
    assert code == 0
    assert [x["size"] for x in _load(out)] == [19, 18]

    code, out = _run(capsys, "split", "", "--mtu", "100")
    assert code == 0
    assert _load(out) == [{"flag": "only", "size": 0, "hex": "c0"}]

    code, out = _run(capsys, "split", "0102", "-S", "0")  # Clamped to the maximum.
    assert code == 0
    assert _load(out) == [{"flag": "only", "size": 2, "hex": "c20102"}]


def _unittest_join(capsys: typing.Any, monkeypatch: typing.Any) -> None:
    code, out = _run(capsys, "join", "4548656c6c6f", "052c20776f72", "836c6421", "--text")
    assert code == 0
    assert _load(out) == {"status": "completed", "chunks": 3, "payloads": ["Hello, world!"]}

    code, out = _run(capsys, "dechunk", "c26869", "c0")
    assert code == 0
    assert _load(out) == {"status": "completed", "chunks": 2, "payloads": ["6869", ""]}

    code, out = _run(capsys, "join", "4548656c6c6f")
    assert code == 1
    assert _load(out) == {"status": "incomplete", "chunks": 1, "payloads": []}

    code, out = _run(capsys, "join", "4548656c6c6f", "05")
    assert code == 1
    assert _load(out) == {"status": "failed", "error": "length_mismatch", "chunk_index": 1}

    monkeypatch.setattr("sys.stdin", io.StringIO("# captured chunks\n4548656c6c6f\n\n052c20776f72\n836c6421\n"))
    code, out = _run(capsys, "join", "-", "--text")
    assert code == 0
    assert _load(out)["payloads"] == ["Hello, world!"]


def _unittest_mtu(capsys: typing.Any) -> None:
    code, out = _run(capsys, "mtu", "20")
    assert code == 0
    assert out.strip() == "19"

    code, out = _run(capsys, "mtu", "1")
    assert code == 1
    assert out == ""
    assert "Error: InvalidConfigurationError" in capsys.readouterr().err


def _unittest_errors(capsys: typing.Any) -> None:
    with pytest.raises(SystemExit) as ex_info:
        blechunk._cli.main(["split", "not-hex"])
    assert ex_info.value.code == 1
    assert "Error: ValueError" in capsys.readouterr().err

    with pytest.raises(SystemExit) as ex_info:
        blechunk._cli.main([])
    assert ex_info.value.code == 1
    err = capsys.readouterr().err
    assert "No command specified" in err
    assert "split (aliases: chunk)" in err
