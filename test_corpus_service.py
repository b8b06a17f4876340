"""
Tests for loading the exam corpus from JSON files
"""
import json
from pathlib import Path

import pytest

from examcheck.exceptions import ExamNotFoundError
from examcheck.services.corpus_service import CorpusService

SAMPLE_DATA = Path(__file__).parent / "data" / "exams"


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "DEFENCE").mkdir()
    (tmp_path / "DEFENCE" / "afcat.json").write_text(json.dumps({
        "exam_code": "AFCAT",
        "exam_name": "Air Force Common Admission Test",
        "branches": {"FLYING": {"gender": "MALE, FEMALE"}, "GROUND DUTY": {"gender": "MALE, FEMALE"}},
    }))
    (tmp_path / "state.json").write_text(json.dumps({
        "KPSC": {"exam_name": "Karnataka Civil Services", "domicile": "KARNATAKA"},
        "TNPSC": {"exam_name": "Tamil Nadu Group 1", "domicile": "TAMIL NADU"},
    }))
    (tmp_path / "no_code.json").write_text(json.dumps({"gender": "MALE", "weight_kg": "50"}))
    (tmp_path / "broken.json").write_text("{not json")
    return tmp_path


def test_load_reads_records_and_record_maps(data_dir):
    service = CorpusService()
    assert service.load(str(data_dir)) == 4
    assert list(service.corpus()) == ["AFCAT", "NO_CODE", "KPSC", "TNPSC"]
    assert list(service.load_errors) == [str(data_dir / "broken.json")]


def test_get_raw_is_case_insensitive(data_dir):
    service = CorpusService(str(data_dir))
    assert service.get_raw("kpsc")["exam_name"] == "Karnataka Civil Services"
    with pytest.raises(ExamNotFoundError):
        service.get_raw("UNKNOWN")


def test_list_exams(data_dir):
    service = CorpusService(str(data_dir))
    exams = {info.exam_code: info for info in service.list_exams()}
    assert exams["AFCAT"].is_divisioned
    assert exams["AFCAT"].divisions == ["FLYING", "GROUND DUTY"]
    assert not exams["KPSC"].is_divisioned
    assert exams["NO_CODE"].exam_name == "NO_CODE"


def test_missing_directory_loads_nothing(tmp_path):
    service = CorpusService()
    assert service.load(str(tmp_path / "missing")) == 0
    assert service.corpus() == {}


def test_sample_data_resolves():
    service = CorpusService(str(SAMPLE_DATA))
    codes = [info.exam_code for info in service.list_exams()]
    assert codes == ["CDS", "NDA", "SSC_GD"]
