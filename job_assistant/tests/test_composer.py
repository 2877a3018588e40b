from job_assistant.catalog.base import JobQuery
from job_assistant.dialogue.composer import NOT_FOUND_SUGGESTIONS, ResponseComposer, pluralize
from job_assistant.dialogue.query import NO_QUERY, QueryPlan, summarize_job
from job_assistant.tests.helpers import make_job


def _summaries(n):
    return [summarize_job(make_job(str(i), f"Role {i}", "Pune", salary=1234567, experience_level=i)) for i in range(n)]


def test_pluralize():
    assert pluralize(1) == "job"
    assert pluralize(2) == "jobs"


def test_greeting_varies_with_context():
    composer = ResponseComposer()
    first = composer.compose("greeting", NO_QUERY, [], {})
    again = composer.compose("greeting", NO_QUERY, [], {"hasSearchedJobs": True})
    assert first.message.startswith("Hello! 👋 I'm your intelligent Job Portal assistant.")
    assert again.message == "Hello again! 👋 Ready to continue your job search?"
    assert len(first.suggestions) == 4
    assert first.suggestions == again.suggestions


def test_job_search_found_formats_salary_and_count():
    composer = ResponseComposer()
    plan = QueryPlan(query=JobQuery(text="Pune"), subject="Pune")
    reply = composer.compose("job_search", plan, _summaries(1))
    assert reply.message.startswith('I found 1 job matching "Pune":')
    assert "1. **Role 0** at Acme" in reply.message
    assert "Salary: ₹1,234,567" in reply.message
    assert "Experience: 0 years" in reply.message
    assert len(reply.jobs) == 1

    reply = composer.compose("job_search", plan, _summaries(2))
    assert reply.message.startswith('I found 2 jobs matching "Pune":')


def test_job_search_not_found_offers_alternatives():
    plan = QueryPlan(query=JobQuery(text="cobol"), subject="cobol")
    reply = ResponseComposer().compose("job_search", plan, [])
    assert reply.message.startswith('I couldn\'t find any jobs matching "cobol".')
    assert reply.suggestions == NOT_FOUND_SUGGESTIONS
    assert reply.jobs == []


def test_job_search_without_term():
    composer = ResponseComposer()
    plan = QueryPlan(query=JobQuery())
    assert composer.compose("job_search", plan, []).message == (
        "There are no jobs available at the moment. Check back later!"
    )
    reply = composer.compose("job_search", plan, _summaries(3))
    assert reply.message.startswith("Here are 3 recent job openings:")
    assert "Location: Pune | Salary: ₹1,234,567" in reply.message


def test_location_and_salary_clarification_without_slot():
    composer = ResponseComposer()
    assert "tell me the city" in composer.compose("location_query", NO_QUERY, []).message
    assert "specify the amount" in composer.compose("salary_query", NO_QUERY, []).message


def test_location_reply_lists_title_company_and_salary():
    composer = ResponseComposer()
    plan = QueryPlan(query=JobQuery(location="Pune"), subject="Pune")
    one = composer.compose("location_query", plan, _summaries(1))
    assert one.message == "Found 1 job in Pune:\n\n1. **Role 0** at Acme\n   Salary: ₹1,234,567"
    assert one.jobs == _summaries(1)

    two = composer.compose("location_query", plan, _summaries(2))
    assert two.message == (
        "Found 2 jobs in Pune:\n\n"
        "1. **Role 0** at Acme\n   Salary: ₹1,234,567\n\n"
        "2. **Role 1** at Acme\n   Salary: ₹1,234,567"
    )
    assert len(two.jobs) == 2

    none = composer.compose("location_query", plan, [])
    assert none.message == "No jobs found in Pune. Would you like me to search in other locations?"
    assert none.jobs == []


def test_skills_reply_lists_title_and_company():
    composer = ResponseComposer()
    plan = QueryPlan(query=JobQuery(text="python"), subject="python")
    one = composer.compose("skills_query", plan, _summaries(1))
    assert one.message == "Found 1 job requiring python:\n\n1. **Role 0** - Acme"
    assert one.suggestions == []
    assert len(one.jobs) == 1

    two = composer.compose("skills_query", plan, _summaries(2))
    assert two.message == "Found 2 jobs requiring python:\n\n1. **Role 0** - Acme\n2. **Role 1** - Acme"
    assert [j.title for j in two.jobs] == ["Role 0", "Role 1"]

    none = composer.compose("skills_query", plan, [])
    assert none.message == "No jobs found requiring python. Try searching for related skills or browse all jobs."
    assert none.jobs == []


def test_salary_reply_uses_currency_symbol():
    composer = ResponseComposer(currency_symbol="$")
    plan = QueryPlan(query=JobQuery(min_salary=500000), min_salary=500000)
    assert composer.compose("salary_query", plan, []).message == (
        "No jobs found with salary ≥ $500,000. Try searching with a lower salary range."
    )
    reply = composer.compose("salary_query", plan, _summaries(2))
    assert reply.message.startswith("Found 2 jobs with salary ≥ $500,000:")
    assert "2. **Role 1** - $1,234,567" in reply.message


def test_fallback_recaps_jobs_to_three():
    composer = ResponseComposer()
    plan = QueryPlan(query=JobQuery(text="quantum"), subject="quantum")
    reply = composer.compose("fallback", plan, _summaries(5))
    assert reply.message.startswith("I found 5 jobs that might interest you:")
    assert len(reply.jobs) == 3
    assert "4. **" not in reply.message

    no_match = composer.compose("fallback", plan, [])
    assert no_match.message.startswith("I'm not sure I understand that question completely.")
    assert no_match.suggestions == ["Show me jobs", "How do I apply?", "Help"]

    pure = composer.compose("fallback", NO_QUERY, [])
    assert pure.suggestions == ["Show me jobs", "Help", "How do I apply?"]


def test_static_templates_have_at_most_four_chips():
    composer = ResponseComposer()
    for intent in ("apply_help", "profile_help", "help", "thanks", "goodbye", "skills_query"):
        reply = composer.compose(intent, NO_QUERY, [])
        assert reply.message
        assert len(reply.suggestions) <= 4
        assert reply.jobs == []
