"""
CLI module - unified command-line interface.

Provides entry points for:
- Asking questions and chatting with the assistant
- Searching and citing passages
- Seeding the Postgres store
"""

from legal_search_pipeline.cli.commands import (
    main,
    run_ask_cli,
    run_search_cli,
    run_cite_cli,
    run_chat_cli,
    run_seed_cli,
)

__all__ = [
    "main",
    "run_ask_cli",
    "run_search_cli",
    "run_cite_cli",
    "run_chat_cli",
    "run_seed_cli",
]
