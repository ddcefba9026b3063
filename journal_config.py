from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


@dataclass(slots=True)
class JournalEnvironmentConfig:
    db_path: str
    storage_key: str
    recent_trades_limit: int
    llm_model: str
    llm_base_url: str
    llm_api_key: str


def load_journal_environment(env_file: str = ".env") -> JournalEnvironmentConfig:
    load_dotenv(env_file, override=False)

    return JournalEnvironmentConfig(
        db_path=os.getenv("JOURNAL_DB_PATH", "data/trade_journal.db"),
        storage_key=os.getenv("JOURNAL_STORAGE_KEY", "forexTradeLogs"),
        recent_trades_limit=int(os.getenv("JOURNAL_RECENT_TRADES", "10")),
        llm_model=os.getenv("LLM_MODEL", "gemini-2.5-flash"),
        llm_base_url=os.getenv("LLM_BASE_URL", GEMINI_OPENAI_BASE_URL),
        llm_api_key=(os.getenv("LLM_API_KEY") or os.getenv("API_KEY") or "").strip(),
    )


COACH_SYSTEM_PROMPT = """
Act as an experienced trading psychologist and mentor for discretionary forex traders.
You review one logged trade at a time and reply with a concise, actionable suggestion
to improve the trader's mindset or execution on the next trade.
The tone is supportive and constructive. Never be generic.
""".strip()
