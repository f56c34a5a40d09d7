from lessonscan.analysis.categorize import categorize, category_stats, lessons_in_category, related_lessons
from lessonscan.documents.extractor import extract
from lessonscan.pipeline import analyze_content
from lessonscan.schema.schema import ValidationSchema


def test_empty_content_is_general() -> None:
    record = extract("", fallback_title="empty")
    assert categorize("", record) == ["general"]


def test_categories_follow_table_then_priority_then_phase(deploy_lesson: str) -> None:
    record = extract(deploy_lesson, fallback_title="deploy")
    categories = categorize(deploy_lesson, record)

    assert categories == ["devops", "critical", "deployment"]


def test_categories_are_never_empty(schema: ValidationSchema, full_lesson: str, testing_lesson: str) -> None:
    for content in ("", "plain words", full_lesson, testing_lesson):
        analysis = analyze_content(content, filename="x.md", schema=schema)
        assert analysis.record.categories


def test_category_queries(
    schema: ValidationSchema, full_lesson: str, deploy_lesson: str, testing_lesson: str
) -> None:
    analyses = [
        analyze_content(full_lesson, filename="full.md", schema=schema),
        analyze_content(deploy_lesson, filename="deploy.md", schema=schema),
        analyze_content(testing_lesson, filename="testing.md", schema=schema),
    ]

    stats = category_stats(analyses)
    assert stats["critical"] == 2
    assert stats["testing"] == 1

    assert [a.filename for a in lessons_in_category("critical", analyses)] == ["full.md", "deploy.md"]

    related = related_lessons("deploy.md", analyses)
    assert [a.filename for a in related] == ["full.md"]
    assert related_lessons("missing.md", analyses) == []
