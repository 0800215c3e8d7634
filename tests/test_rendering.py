import pytest

from CVapp.rendering import EXTERNAL_LINK_REL, cv_to_text, render_cv, safe_external_url
from CVapp.schemas import CVRecord, parse_submission
from tests.conftest import JANE_CV


def test_render_scenario_b(jane_cv):
    display = render_cv(jane_cv)

    assert display.name == "Jane Doe"
    assert display.email == "j@x.com"
    assert display.phone == "555"
    assert display.linkedin.text == "https://li/jane"
    assert display.linkedin.href == "https://li/jane"
    assert display.linkedin.target == "_blank"
    assert display.linkedin.rel == EXTERNAL_LINK_REL
    assert display.skills == ("Go",)
    assert display.technologies == ("SQL",)
    assert display.experience[0].fields == (
        ("Title", "Eng"),
        ("Company", "Acme"),
        ("Years", "2020-2023"),
    )
    assert display.education[0].fields == (
        ("Degree", "BSc"),
        ("School", "MIT"),
        ("Year", "2019"),
    )


def test_render_preserves_order():
    record = CVRecord.model_validate(
        dict(
            JANE_CV,
            skills=["Zig", "Ada", "Zig"],
            technologies=["Redis", "Kafka"],
            experience=[
                {"title": "Lead", "company": "Beta", "years": "2023-"},
                {"title": "Eng", "company": "Acme", "years": "2020-2023"},
            ],
            education=[
                {"degree": "MSc", "school": "ETH", "year": "2021"},
                {"degree": "BSc", "school": "MIT", "year": "2019"},
            ],
        )
    )

    display = render_cv(record)

    assert display.skills == ("Zig", "Ada", "Zig")
    assert display.technologies == ("Redis", "Kafka")
    assert [entry.fields[1][1] for entry in display.experience] == ["Beta", "Acme"]
    assert [entry.fields[1][1] for entry in display.education] == ["ETH", "MIT"]
    assert record.skills == ("Zig", "Ada", "Zig")


def test_render_empty_sequences():
    display = render_cv(CVRecord(name="Empty"))

    assert display.skills == ()
    assert display.technologies == ()
    assert display.experience == ()
    assert display.education == ()
    assert display.linkedin.href is None


def test_hidden_field_round_trip(jane_cv):
    assert parse_submission(render_cv(jane_cv).serialized) == jane_cv


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://www.linkedin.com/in/jane", "https://www.linkedin.com/in/jane"),
        ("  http://li/jane ", "http://li/jane"),
        ("javascript:alert(1)", None),
        ("data:text/html,<b>x</b>", None),
        ("//evil.example", None),
        ("linkedin.com/in/jane", None),
        ("", None),
    ],
)
def test_safe_external_url(url, expected):
    assert safe_external_url(url) == expected


def test_unsafe_linkedin_keeps_text_without_link():
    record = CVRecord.model_validate(
        dict(JANE_CV, contact={"linkedin": "javascript:alert(1)"})
    )

    display = render_cv(record)

    assert display.linkedin.text == "javascript:alert(1)"
    assert display.linkedin.href is None


def test_cv_to_text_layout(jane_cv):
    text = cv_to_text(render_cv(jane_cv))

    assert text.startswith("# Jane Doe\n")
    assert "- LinkedIn: https://li/jane" in text
    assert "## Skills\n- Go\n" in text
    assert "**Eng**\n- Company: Acme\n- Years: 2020-2023" in text
    assert "**BSc**\n- School: MIT\n- Year: 2019" in text
