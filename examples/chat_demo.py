"""Minimal interactive demonstration of the dialogue engine."""

from pathlib import Path

from job_assistant.catalog.memory import InMemoryJobCatalog
from job_assistant.dialogue.engine import DialogueEngine
from job_assistant.infrastructure.storage.json_store import JsonConversationStore

if __name__ == "__main__":
    here = Path(__file__).resolve().parent
    engine = DialogueEngine(
        store=JsonConversationStore(root=here / ".storage"),
        catalog=InMemoryJobCatalog.from_file(here / "jobs.yaml"),
    )
    session_id = None
    while True:
        try:
            text = input("You: ").strip()
        except EOFError:
            break
        if not text:
            continue
        result = engine.handle_message(text, session_id=session_id)
        session_id = result.session_id
        print("Assistant:", result.reply.message)
        if result.reply.suggestions:
            print("  ->", " | ".join(result.reply.suggestions))
