"""Tests for LongitudinalDataRepository."""

from __future__ import annotations

import pandas as pd
import pytest

from msmprep.application.ports import LongitudinalDataRepositoryPort
from msmprep.infrastructure.io import (
    DataParseError,
    DataSourceNotFoundError,
    DataWriteError,
)
from msmprep.infrastructure.repositories import LongitudinalDataRepository
from msmprep.infrastructure.repositories import longitudinal_data_repository


@pytest.fixture
def repository() -> LongitudinalDataRepository:
    return LongitudinalDataRepository()


def test_implements_port(repository):
    assert isinstance(repository, LongitudinalDataRepositoryPort)


class TestReadDataset:
    def test_reads_csv(self, repository, tmp_path):
        path = tmp_path / "episodes.csv"
        path.write_text("subj,start\nA,0\n", encoding="utf-8")
        frame = repository.read_dataset(str(path))
        assert frame.to_dict("records") == [{"subj": "A", "start": "0"}]

    def test_reads_txt_as_csv(self, repository, tmp_path):
        path = tmp_path / "episodes.txt"
        path.write_text("subj,start\nA,0\n", encoding="utf-8")
        assert list(repository.read_dataset(path).columns) == ["subj", "start"]

    def test_reads_sas(self, repository, tmp_path, monkeypatch):
        path = tmp_path / "episodes.sas7bdat"
        path.write_bytes(b"")
        expected = pd.DataFrame({"subj": ["A"], "start": [0.0]})
        calls = []

        def fake_read(file_path):
            calls.append(file_path)
            return expected, object()

        monkeypatch.setattr(
            longitudinal_data_repository.pyreadstat, "read_sas7bdat", fake_read
        )
        frame = repository.read_dataset(path)
        assert frame is expected
        assert calls == [str(path)]

    def test_sas_failure_is_parse_error(self, repository, tmp_path):
        path = tmp_path / "broken.sas7bdat"
        path.write_bytes(b"not a sas file")
        with pytest.raises(DataParseError, match="Failed to read SAS file"):
            repository.read_dataset(path)

    def test_reads_excel(self, repository, tmp_path):
        pytest.importorskip("openpyxl")
        path = tmp_path / "episodes.xlsx"
        pd.DataFrame({"subj": ["A", "B"], "start": [0, 3]}).to_excel(path, index=False)
        frame = repository.read_dataset(path)
        assert frame["start"].tolist() == [0, 3]

    def test_unsupported_format(self, repository, tmp_path):
        path = tmp_path / "episodes.parquet"
        path.write_bytes(b"")
        with pytest.raises(DataParseError, match="Unsupported format '.parquet'"):
            repository.read_dataset(path)

    def test_missing_file(self, repository, tmp_path):
        with pytest.raises(DataSourceNotFoundError):
            repository.read_dataset(tmp_path / "absent.csv")


class TestWriteDataset:
    def test_writes_csv_without_index(self, repository, tmp_path):
        path = tmp_path / "out" / "augmented.csv"
        written = repository.write_dataset(pd.DataFrame({"a": [1, 2]}), path)
        assert written == path
        assert path.read_text(encoding="utf-8").splitlines() == ["a", "1", "2"]

    def test_writes_tsv(self, repository, tmp_path):
        path = tmp_path / "augmented.tsv"
        repository.write_dataset(pd.DataFrame({"a": [1], "b": [2]}), path)
        assert path.read_text(encoding="utf-8").splitlines()[0] == "a\tb"

    def test_unsupported_output(self, repository, tmp_path):
        with pytest.raises(DataWriteError, match="Unsupported output format"):
            repository.write_dataset(pd.DataFrame(), tmp_path / "out.xlsx")
