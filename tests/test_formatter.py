from operations_audit.formatter import PLACEHOLDER, format_submission
from operations_audit.models import QUESTIONS, AnswerSet, ContactInfo, SubmissionPayload


def _full_payload() -> SubmissionPayload:
    answers = AnswerSet()
    answers.set_choice("q1", "Not sure")
    answers.toggle("q2", "Customer follow-ups")
    answers.toggle("q2", "Lead intake / inquiries")
    answers.set_choice("q3", "Yes, internal tools or custom software")
    answers.set_choice("q4", "Somewhat important")
    answers.set_choice("q5", "We patch it manually")
    answers.set_text("q6", "Automate quoting")
    answers.set_choice("q7", "Yes")
    answers.set_choice("q8", "16–50 people")
    answers.set_choice("q9", "$1M–$5M")
    contact = ContactInfo(
        first_name="Ada",
        email="ada@example.com",
        phone="(555) 123-4567",
        company="Analytical Engines",
        consent=True,
    )
    return SubmissionPayload.capture(answers, contact)


def test_full_submission_text() -> None:
    expected = "\n".join([
        "🔔 New Pre-Audit Submission",
        "",
        "——— Contact ———",
        "Name: Ada",
        "Email: ada@example.com",
        "Phone: 5551234567",
        "Company: Analytical Engines",
        "",
        "——— Step 1: Operations setup ———",
        "Not sure",
        "",
        "——— Step 2: Inefficient areas ———",
        "Customer follow-ups, Lead intake / inquiries",
        "",
        "——— Step 3: Custom tools ———",
        "Yes, internal tools or custom software",
        "",
        "——— Step 4: Pricing/quoting importance ———",
        "Somewhat important",
        "",
        "——— Step 5: When something breaks ———",
        "We patch it manually",
        "",
        "——— Step 6: Ideal system (optional) ———",
        "Automate quoting",
        "",
        "——— Step 7: Open to custom systems ———",
        "Yes",
        "",
        "——— Step 8: Company size ———",
        "16–50 people",
        "",
        "——— Step 9: Revenue range ———",
        "$1M–$5M",
    ])
    assert format_submission(_full_payload()) == expected


def test_formatter_is_deterministic() -> None:
    first = format_submission(_full_payload())
    second = format_submission(_full_payload())
    assert first == second
    assert first.encode() == second.encode()


def test_empty_payload_enumerates_every_question_with_placeholders() -> None:
    text = format_submission(SubmissionPayload())
    lines = text.splitlines()

    headers = [line for line in lines if line.startswith("——— Step")]
    assert headers == [
        f"——— Step {i}: {q.label} ———" for i, q in enumerate(QUESTIONS, start=1)
    ]
    for header in headers:
        assert lines[lines.index(header) + 1] == PLACEHOLDER

    assert f"Name: {PLACEHOLDER}" in lines
    assert f"Email: {PLACEHOLDER}" in lines
    assert f"Phone: {PLACEHOLDER}" in lines
    assert f"Company: {PLACEHOLDER}" in lines
    assert not text.endswith("\n")


def test_empty_values_use_placeholder() -> None:
    payload = SubmissionPayload(
        answers={"q1": "", "q2": [], "q6": "   "},
        contact={"firstName": "Ada", "company": ""},
    )
    lines = format_submission(payload).splitlines()

    assert "Company: —" in lines
    step1 = lines.index("——— Step 1: Operations setup ———")
    step2 = lines.index("——— Step 2: Inefficient areas ———")
    step6 = lines.index("——— Step 6: Ideal system (optional) ———")
    assert lines[step1 + 1] == PLACEHOLDER
    assert lines[step2 + 1] == PLACEHOLDER
    assert lines[step6 + 1] == PLACEHOLDER


def test_multi_select_keeps_selection_order() -> None:
    answers = AnswerSet()
    answers.toggle("q2", "Website or customer-facing systems")
    answers.toggle("q2", "Lead intake / inquiries")
    answers.toggle("q2", "Pricing or quoting")
    text = format_submission(SubmissionPayload.capture(answers, ContactInfo()))

    assert "Website or customer-facing systems, Lead intake / inquiries, Pricing or quoting" in text
