from pathlib import Path

import httpx
import pytest

from speedgraph import config
from speedgraph.loader import LoadFailure, load_dataset, read_csv_source

CSV_TEXT = "name,speed,diet\nCheetah,120,Carnivore\nRabbit,56,Herbivore\n"


def make_temp_csv(tmp_path: Path, text: str = CSV_TEXT, encoding: str = "utf-8") -> Path:
    path = tmp_path / "animals.csv"
    path.write_text(text, encoding=encoding)
    return path


def mock_client(status_code: int = 200, text: str = CSV_TEXT) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["cache-control"] == "no-store"
        return httpx.Response(status_code, text=text)

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_reads_local_file(tmp_path: Path):
    path = make_temp_csv(tmp_path)
    assert read_csv_source(str(path)) == CSV_TEXT


def test_local_file_with_bom(tmp_path: Path):
    path = make_temp_csv(tmp_path, encoding="utf-8-sig")
    dataset = load_dataset(str(path))
    assert dataset.headers == ["name", "speed", "diet"]


def test_missing_file_is_load_failure(tmp_path: Path):
    missing = tmp_path / "nope.csv"
    with pytest.raises(LoadFailure) as info:
        read_csv_source(str(missing))
    assert info.value.source == str(missing)
    assert "not found" in info.value.message


def test_fetches_url():
    text = read_csv_source("https://example.test/animals.csv", client=mock_client())
    assert text == CSV_TEXT


def test_non_success_status_is_load_failure():
    with pytest.raises(LoadFailure) as info:
        read_csv_source("https://example.test/animals.csv", client=mock_client(status_code=404))
    assert "HTTP 404" in info.value.message


def test_transport_error_is_load_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    with pytest.raises(LoadFailure):
        read_csv_source("http://example.test/animals.csv", client=client)


def test_load_dataset_infers_roles():
    dataset = load_dataset("https://example.test/animals.csv", client=mock_client())
    assert dataset.source == "https://example.test/animals.csv"
    assert len(dataset.records) == 2
    assert (dataset.roles.name_column, dataset.roles.value_column, dataset.roles.group_column) == (
        "name",
        "speed",
        "diet",
    )


def test_load_dataset_uses_configured_source(tmp_path: Path, monkeypatch):
    path = make_temp_csv(tmp_path)
    monkeypatch.setenv("SPEEDGRAPH_CSV_SOURCE", str(path))
    assert config.csv_source() == str(path)
    assert load_dataset().source == str(path)


def test_every_load_reads_fresh(tmp_path: Path):
    path = make_temp_csv(tmp_path)
    assert len(load_dataset(str(path)).records) == 2
    path.write_text(CSV_TEXT + "Lion,80,Carnivore\n", encoding="utf-8")
    assert len(load_dataset(str(path)).records) == 3


def test_bundled_sample_dataset():
    dataset = load_dataset(config.DEFAULT_CSV_SOURCE)
    assert dataset.roles.name_column == "common_name"
    assert dataset.roles.value_column == "top_speed"
    assert dataset.roles.group_column == "diet"
