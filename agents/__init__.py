"""
agents — LLM-backed helpers for the trade journal.

Agents:
- TradeCoach: turns one trade's context into a short psychology/execution suggestion
- llm_client: OpenAI-compatible chat helper shared by the agents
"""
