from lessonscan.analysis.impact import impact_dimensions, impact_metrics, impact_recommendations, score_impact
from lessonscan.documents.extractor import extract
from lessonscan.pipeline import analyze_content
from lessonscan.schema.schema import ValidationSchema


def test_metrics_are_binary_per_dimension() -> None:
    metrics = impact_metrics("Our workflow improved after the rollout")

    assert metrics == {"technical": 0, "process": 25, "project": 0, "quality": 0, "adoption": 25}
    assert impact_dimensions("Our workflow improved after the rollout") == ["process", "adoption"]


def test_score_is_clamped(full_lesson: str) -> None:
    record = extract(full_lesson, fallback_title="x")
    score = score_impact(full_lesson, record, impact_dimensions(full_lesson))

    assert score == 100


def test_priority_and_phase_weights(deploy_lesson: str, testing_lesson: str) -> None:
    deploy = extract(deploy_lesson, fallback_title="deploy")
    testing = extract(testing_lesson, fallback_title="testing")

    assert score_impact(deploy_lesson, deploy, impact_dimensions(deploy_lesson)) == 100
    # base 50 + low 5 + testing 15
    assert score_impact(testing_lesson, testing, impact_dimensions(testing_lesson)) == 70


def test_signal_terms_match_case_sensitively() -> None:
    # base 50 + critical 30, plus 10 only for the lowercase signal
    capitalized = extract("Critical outage", fallback_title="x")
    lowercase = extract("critical outage", fallback_title="x")

    assert capitalized.priority == lowercase.priority == "critical"
    assert score_impact("Critical outage", capitalized, []) == 80
    assert score_impact("critical outage", lowercase, []) == 90


def test_react_counts_for_bonus_but_not_metrics() -> None:
    assert impact_dimensions("react hooks") == ["technical"]
    assert impact_metrics("react hooks")["technical"] == 0

    record = extract("react hooks", fallback_title="x")
    assert score_impact("react hooks", record, impact_dimensions("react hooks")) == score_impact(
        "react hooks", record, []
    ) + 5


def test_impact_recommendations(schema: ValidationSchema, testing_lesson: str) -> None:
    analysis = analyze_content(testing_lesson, filename="testing.md", schema=schema)
    hints = impact_recommendations(analysis)

    assert "Add more key insights to make the lesson more impactful" in hints
    assert "Add more actionable recommendations to increase lesson impact" not in hints
