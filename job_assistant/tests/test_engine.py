import tempfile
from pathlib import Path

import pytest

from job_assistant.catalog.memory import InMemoryJobCatalog
from job_assistant.dialogue.engine import DialogueEngine
from job_assistant.domain.exceptions import InvalidInput, StorageFailure
from job_assistant.infrastructure.storage.json_store import JsonConversationStore
from job_assistant.tests.helpers import make_job


def _catalog():
    return InMemoryJobCatalog([
        make_job("j1", "Backend Engineer", "Pune", salary=800000, days=1),
        make_job("j2", "QA Analyst", "Mumbai", salary=450000, days=2),
    ])


def _engine(root, catalog=None, ids=None):
    return DialogueEngine(
        store=JsonConversationStore(root=root),
        catalog=catalog or _catalog(),
        id_generator=ids,
    )


def test_show_me_jobs_in_pune_end_to_end():
    with tempfile.TemporaryDirectory() as d:
        engine = _engine(Path(d))
        result = engine.handle_message("Show me jobs in Pune")
        assert result.intent == "job_search"
        assert [j.title for j in result.reply.jobs] == ["Backend Engineer"]
        assert result.reply.jobs[0].location == "Pune"
        assert "₹800,000" in result.reply.message
        assert result.is_new
        assert len(result.session_id) == 32


def test_location_filter_is_case_insensitive():
    with tempfile.TemporaryDirectory() as d:
        result = _engine(Path(d)).respond("remote work near pune")
        assert result["intent"] == "location_query"
        assert [j.id for j in result["reply"].jobs] == ["j1"]


def test_turn_persists_pair_and_context():
    with tempfile.TemporaryDirectory() as d:
        engine = _engine(Path(d), ids=lambda: "sess-1")
        engine.handle_message("Show me jobs in Pune", user_id="user-9")
        conv = engine.history("sess-1")
        assert [m.role for m in conv.messages] == ["user", "assistant"]
        assert conv.messages[1].metadata.jobs_count == 1
        assert conv.context["hasSearchedJobs"] is True
        assert conv.context["lastQuery"] == "Show me jobs in Pune"
        assert conv.context["lastIntent"] == "job_search"
        assert conv.user_id == "user-9"
        assert engine.history(None, "user-9").session_id == "sess-1"


def test_has_searched_jobs_stays_true_after_empty_turn():
    with tempfile.TemporaryDirectory() as d:
        engine = _engine(Path(d), ids=lambda: "sess-2")
        engine.handle_message("Show me jobs in Pune")
        miss = engine.handle_message("find cobol jobs", session_id="sess-2")
        assert miss.reply.jobs == []
        assert miss.reply.message.startswith('I couldn\'t find any jobs matching "cobol"')
        assert engine.history("sess-2").context["hasSearchedJobs"] is True

        greet = engine.handle_message("hey", session_id="sess-2")
        assert greet.reply.message == "Hello again! 👋 Ready to continue your job search?"
        assert len(engine.history("sess-2").messages) == 6


def test_first_time_greeting():
    with tempfile.TemporaryDirectory() as d:
        result = _engine(Path(d)).handle_message("Hello")
        assert result.reply.message.startswith("Hello! 👋")
        assert result.reply.jobs == []


def test_catalog_outage_degrades_to_no_results():
    class DownCatalog:
        name = "down"

        def find_jobs(self, query):
            raise ConnectionError("catalog down")

    with tempfile.TemporaryDirectory() as d:
        result = _engine(Path(d), catalog=DownCatalog()).handle_message("find python jobs")
        assert result.reply.jobs == []
        assert "couldn't find any jobs" in result.reply.message


@pytest.mark.parametrize("bad", [None, "", "   ", 42, ["hi"]])
def test_invalid_message_mutates_nothing(bad):
    with tempfile.TemporaryDirectory() as d:
        store = JsonConversationStore(root=Path(d))
        engine = DialogueEngine(store=store, catalog=_catalog())
        with pytest.raises(InvalidInput):
            engine.handle_message(bad, session_id="s")
        assert store.list_conversations() == []


def test_storage_failure_propagates():
    class FailingStore:
        def get_conversation(self, session_id):
            return None

        def save_conversation(self, conversation):
            raise StorageFailure(message="disk full")

        def delete_conversation(self, session_id):
            return False

        def find_latest(self, session_id, user_id=None):
            return None

    engine = DialogueEngine(store=FailingStore(), catalog=_catalog())
    with pytest.raises(StorageFailure):
        engine.handle_message("help")


def test_clear_removes_conversation():
    with tempfile.TemporaryDirectory() as d:
        engine = _engine(Path(d), ids=lambda: "sess-3")
        engine.handle_message("help")
        assert engine.clear("sess-3") is True
        assert engine.history("sess-3") is None
        assert engine.clear("sess-3") is False
        assert not hasattr(engine, "sessions")
