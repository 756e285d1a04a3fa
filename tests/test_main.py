import zipfile
from types import SimpleNamespace

import pytest

from parcel_extractor import cli
from parcel_extractor.errors import CountyNotFoundError, ExtractionError
from parcel_extractor.main import main, run_transform


def _input_zip(folder, target):
    with zipfile.ZipFile(target, "w") as zf:
        for name in ("input.html", "property_seed.json", "unnormalized_address.json"):
            zf.write(folder / name, f"parcel/{name}")
    return target


def test_run_transform_zips_county_output(tmp_path, wakulla_parcel):
    source = tmp_path / "source"
    source.mkdir()
    input_zip = _input_zip(wakulla_parcel(folder=source), tmp_path / "input.zip")

    output_zip = run_transform(str(input_zip), str(tmp_path / "out.zip"), work_dir=str(tmp_path / "work"))

    with zipfile.ZipFile(output_zip) as zf:
        names = set(zf.namelist())
    assert {"property.json", "address.json", "county_data_group.json", "sales_1.json"} <= names
    assert "layout_data.json" not in names


def test_run_transform_unknown_county(tmp_path, wakulla_parcel):
    source = tmp_path / "source"
    source.mkdir()
    input_zip = _input_zip(wakulla_parcel(folder=source), tmp_path / "input.zip")

    with pytest.raises(CountyNotFoundError):
        run_transform(str(input_zip), str(tmp_path / "out.zip"), county="Atlantis", work_dir=str(tmp_path / "work"))


def test_main_requires_a_mode():
    with pytest.raises(ExtractionError):
        main(SimpleNamespace(seed=False, transform=False))


def test_cli_rejects_transform_without_zip():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--transform"])
    assert excinfo.value.code == 2


def test_cli_seed(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "seed.csv").write_text("parcel_id,address,county\n12-34,1 MAIN ST,Duval\n")

    cli.main(["--seed", "--seed-csv", "seed.csv", "--output-zip", "seed.zip", "--log-dir", str(tmp_path / "logs")])

    with zipfile.ZipFile(tmp_path / "seed.zip") as zf:
        assert "12-34/property_seed.json" in zf.namelist()
    assert list((tmp_path / "logs").glob("workflow_*.log"))


def test_cli_reports_failures(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--seed", "--seed-csv", "missing.csv", "--log-dir", str(tmp_path / "logs")])

    assert excinfo.value.code == 1
    assert "Error: CSV file not found" in capsys.readouterr().out
