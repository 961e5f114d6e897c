import pytest

from scoring.rubric import PILLAR_NAMES, load_rubric
from utils.exceptions import ReferenceDataError


def test_bundled_rubric_has_every_pillar(rubric):
    for name in PILLAR_NAMES:
        assert name in rubric['pillars']
    assert rubric['pillars']['max_points'] == 25
    assert rubric['aggregate']['max_score'] == 100


def test_missing_rubric_file(tmp_path):
    with pytest.raises(ReferenceDataError):
        load_rubric(tmp_path / "missing.yml")


def test_rubric_missing_section(tmp_path):
    path = tmp_path / "rubric.yml"
    path.write_text("version: '1.4'\npillars:\n  body: {}\n", encoding="utf-8")

    with pytest.raises(ReferenceDataError) as excinfo:
        load_rubric(path)

    assert "pillars.planet" in str(excinfo.value)
    assert "insights" in str(excinfo.value)


def test_invalid_yaml(tmp_path):
    path = tmp_path / "rubric.yml"
    path.write_text("pillars: [unclosed\n", encoding="utf-8")

    with pytest.raises(ReferenceDataError):
        load_rubric(path)
