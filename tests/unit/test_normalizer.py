"""Unit tests for resume record normalization."""

import json

import pytest

from rework.contexts.templating.defaults import DEFAULT_FULL_NAME, PRESENT
from rework.contexts.templating.normalizer import (
    normalize,
    normalize_coursework,
    normalize_identity,
    normalize_skills,
    normalize_summary,
)


@pytest.mark.unit
def test_name_from_combined_field_wins():
    """Test that an explicit name beats first/last name and title."""
    identity = normalize_identity(
        {"name": "Ada King", "firstName": "Ada", "lastName": "Lovelace"}, title="Engineer"
    )
    assert identity.full_name == "Ada King"


@pytest.mark.unit
def test_name_from_first_and_last():
    """Test first + last name concatenation."""
    identity = normalize_identity({"firstName": "Ada", "lastName": "Lovelace"})
    assert identity.full_name == "Ada Lovelace"


@pytest.mark.unit
def test_name_falls_back_to_title_then_default():
    """Test title fallback, then the literal default."""
    assert normalize_identity({}, title="Senior Engineer").full_name == "Senior Engineer"
    assert normalize_identity({}).full_name == DEFAULT_FULL_NAME
    assert normalize_identity("not json").full_name == DEFAULT_FULL_NAME


@pytest.mark.unit
def test_contact_as_json_string():
    """Test contact block stored as a JSON string."""
    raw = {"contactInfo": json.dumps({"firstName": "Grace", "lastName": "Hopper", "email": "g@navy.mil"})}
    doc = normalize(raw)

    assert doc.identity.full_name == "Grace Hopper"
    assert doc.identity.email == "g@navy.mil"
    assert doc.identity.contact_line == "g@navy.mil"


@pytest.mark.unit
def test_record_title_used_when_no_name():
    """Test that the record's own title is the fallback name."""
    doc = normalize({"title": "Data Scientist Resume"})
    assert doc.identity.full_name == "Data Scientist Resume"


@pytest.mark.unit
def test_summary_shapes():
    """Test plain, object and JSON-encoded summaries."""
    assert normalize_summary("Built things.") == "Built things."
    assert normalize_summary({"optimized": "Optimized text."}) == "Optimized text."
    assert normalize_summary(json.dumps({"summary": "Encoded."})) == "Encoded."
    assert normalize_summary(json.dumps("Quoted.")) == "Quoted."


@pytest.mark.unit
def test_summary_invalid_json_is_literal():
    """Test that a string that fails to decode is used as the summary itself."""
    assert normalize_summary("{not valid json") == "{not valid json"


@pytest.mark.unit
def test_summary_object_without_text_keys_is_literal():
    """Test that a decoded object with no summary text keeps the raw string."""
    raw = json.dumps({"headline": "Seasoned engineer"})
    assert normalize_summary(raw) == raw
    assert normalize({"professionalSummary": raw}).summary == raw
    assert normalize_summary({"headline": "Seasoned engineer"}) == ""


@pytest.mark.unit
def test_unicode_normalized():
    """Test that smart quotes, nbsp and zero-width chars are cleaned."""
    text = normalize_summary("\u201cFast\u201d and\u200b\u00a0reliable")
    assert text == '"Fast" and reliable'


@pytest.mark.unit
def test_work_experience_aliases_and_present():
    """Test title aliases and open-ended end dates."""
    raw = {
        "workExperience": [
            {"position": "Engineer", "company": "Acme", "startDate": "2020", "isCurrentRole": True},
            {"jobTitle": "Intern", "company": "Initech", "startDate": "2018", "endDate": "Present"},
            {"title": "Analyst", "company": "Globex", "startDate": "2016", "endDate": "2017"},
            {"title": "Contractor", "company": "Hooli"},
        ]
    }
    jobs = normalize(raw).experience

    assert [job.title for job in jobs] == ["Engineer", "Intern", "Analyst", "Contractor"]
    assert jobs[0].end_date == PRESENT
    assert jobs[1].end_date == PRESENT
    assert jobs[2].end_date == "2017"
    assert jobs[3].is_current


@pytest.mark.unit
def test_experience_as_json_string_keeps_order():
    """Test experience stored as a JSON string is not re-sorted."""
    entries = [{"title": "B", "startDate": "2015"}, {"title": "A", "startDate": "2021"}]
    jobs = normalize({"experience": json.dumps(entries)}).experience
    assert [job.title for job in jobs] == ["B", "A"]


@pytest.mark.unit
def test_achievement_shapes():
    """Test achievements as list, JSON string and bullet-delimited string."""
    as_list = normalize({"experience": [{"achievements": ["Led team", "Built API"]}]})
    as_json = normalize({"experience": [{"achievements": json.dumps(["Led team", "Built API"])}]})
    as_text = normalize({"experience": [{"achievements": "• Led team\n• Built API"}]})

    expected = ("Led team", "Built API")
    assert as_list.experience[0].achievements == expected
    assert as_json.experience[0].achievements == expected
    assert as_text.experience[0].achievements == expected


@pytest.mark.unit
def test_technologies_deduplicated():
    """Test technologies keep first occurrence order."""
    doc = normalize({"experience": [{"technologies": ["Python", "AWS", "Python", "React"]}]})
    assert doc.experience[0].technologies == ("Python", "AWS", "React")


@pytest.mark.unit
def test_job_description_supplements_missing_achievements():
    """Test description and responsibilities aliases."""
    doc = normalize({"experience": [{"title": "Engineer", "responsibilities": "Owned billing."}]})
    assert doc.experience[0].description == "Owned billing."
    assert doc.experience[0].achievements == ()


@pytest.mark.unit
def test_skills_categorized_flattened_in_fixed_order():
    """Test bucket order is technical, frameworks, tools, cloud, databases, soft."""
    skills = normalize_skills(
        {
            "soft": ["Mentoring"],
            "databases": ["Postgres"],
            "technical": ["Python", "Go"],
            "cloud": ["AWS"],
            "frameworks": ["Django", "Python"],
            "tools": ["Git"],
            "other": ["Ignored"],
        }
    )
    assert skills == ("Python", "Go", "Django", "Git", "AWS", "Postgres", "Mentoring")


@pytest.mark.unit
def test_skills_flat_and_delimited():
    """Test flat lists, item objects and delimited strings."""
    assert normalize_skills(["Python", {"name": "SQL"}, {"skill": "Rust"}, "Python"]) == (
        "Python",
        "SQL",
        "Rust",
    )
    assert normalize_skills("Python, SQL • Docker | Go") == ("Python", "SQL", "Docker", "Go")


@pytest.mark.unit
def test_coursework_split_filtered_and_capped():
    """Test coursework delimiting, long-entry filter and the 4-entry cap."""
    long_entry = "x" * 120
    raw = f"Algorithms\n• Databases\n{long_entry}\nCompilers\nNetworks\nGraphics"
    assert normalize_coursework(raw) == ("Algorithms", "Databases", "Compilers", "Networks")
    assert normalize_coursework(["  OS  ", "Security"]) == ("OS", "Security")


@pytest.mark.unit
def test_education_aliases():
    """Test school and relevantCoursework aliases."""
    doc = normalize(
        {
            "education": [
                {
                    "degree": "BS",
                    "field": "Computer Science",
                    "school": "MIT",
                    "graduationYear": 2019,
                    "relevantCoursework": "Algorithms, Data Structures",
                }
            ]
        }
    )
    entry = doc.education[0]

    assert entry.heading == "BS in Computer Science"
    assert entry.institution == "MIT"
    assert entry.graduation_year == "2019"
    assert entry.coursework == ("Algorithms, Data Structures",)


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw", [None, 42, "", "plain text", "[1, 2]", [], {"experience": 7}, "[" * 100000]
)
def test_normalize_never_raises(raw):
    """Test that malformed records yield the placeholder document."""
    doc = normalize(raw)
    assert doc.identity.full_name == DEFAULT_FULL_NAME
    assert doc.experience == ()
    assert doc.is_empty


@pytest.mark.unit
def test_flat_record_contact_fields():
    """Test flat records with contact fields at the top level."""
    doc = normalize(json.dumps({"firstName": "Alan", "lastName": "Turing", "phone": "555"}))
    assert doc.identity.full_name == "Alan Turing"
    assert doc.identity.phone == "555"


@pytest.mark.unit
def test_total_content_length():
    """Test aggregate content volume used by font scaling."""
    doc = normalize(
        {
            "summary": "abcde",
            "experience": [{"achievements": ["1234", "56"], "description": "xyz"}],
            "skills": ["Go", "Rust"],
        }
    )
    assert doc.total_content_length == 5 + 4 + 2 + 3 + len("Go, Rust")
