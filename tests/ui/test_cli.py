from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from ocpimodel.ui import cli
from tests.support.payloads import location_payload

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, payload: object) -> str:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_validate_prints_canonical_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write(tmp_path / "location.json", location_payload())

    cli.main(["validate", "location", source])

    assert json.loads(capsys.readouterr().out) == location_payload()


def test_validate_with_out_of_band_identity(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    payload = location_payload()
    del payload["id"]
    source = _write(tmp_path / "location.json", payload)

    cli.main(["validate", "location", source, "--id", "LOC0009"])

    assert json.loads(capsys.readouterr().out)["id"] == "LOC0009"


def test_validate_failure_exits_with_one(tmp_path: Path) -> None:
    source = _write(tmp_path / "location.json", location_payload(city=None))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["validate", "location", source])

    assert excinfo.value.code == 1


def test_patch_prints_patched_entity(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write(tmp_path / "location.json", location_payload())
    patch = _write(tmp_path / "patch.json", {"facilities": ["CAFE", "AIRPORT"]})

    cli.main(["patch", "location", source, patch])

    assert json.loads(capsys.readouterr().out)["facilities"] == ["CAFE", "AIRPORT"]


def test_rejected_patch_prints_original_and_exits_with_one(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = _write(tmp_path / "location.json", location_payload())
    patch = _write(
        tmp_path / "patch.json", {"name": "X", "last_updated": "2019-01-01T00:00:00Z"}
    )

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["patch", "location", source, patch, "--no-downgrades"])

    assert excinfo.value.code == 1
    assert json.loads(capsys.readouterr().out)["name"] == "Gent Zuid"


def test_missing_file_exits_with_two(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["validate", "location", str(tmp_path / "missing.json")])

    assert excinfo.value.code == 2


def test_unknown_kind_is_an_argument_error(tmp_path: Path) -> None:
    source = _write(tmp_path / "location.json", location_payload())

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["validate", "booking", source])

    assert excinfo.value.code == 2


def test_invalid_configuration_exits_with_two(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("OCPIMODEL_LOG_LEVEL", "loud")
    source = _write(tmp_path / "location.json", location_payload())

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["validate", "location", source])

    assert excinfo.value.code == 2
