"""
CLI commands - entry points for searching and answering from a terminal.

Each command follows a consistent pattern:
1. Parse arguments
2. Load environment
3. Build the pipeline (mock or production)
4. Run one async operation
5. Print results and return an exit code

With --mock the pipeline runs on hash embeddings, an in-memory store loaded
with the seed corpus, and a canned chat model: no network, no database.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from legal_search_pipeline.core import EmbeddingError


def _load_env() -> None:
    """Load environment variables from .env file."""
    from dotenv import load_dotenv

    load_dotenv()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _common_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--mock", action="store_true", help="Run offline on mock components")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


async def _open_pipeline(use_mock: bool):
    """
    Build and (in mock mode) seed a pipeline.

    The store connects lazily on first query, so an unreachable database
    degrades to "no documents" instead of aborting the command.
    """
    from legal_search_pipeline.config import Settings
    from legal_search_pipeline.observability import init_phoenix
    from legal_search_pipeline.pipeline import build_pipeline
    from legal_search_pipeline.retrieval import seed_vector_store

    init_phoenix()
    settings = Settings.from_env()
    use_mock = use_mock or settings.use_mock
    pipeline = build_pipeline(settings, use_mock=use_mock)
    if use_mock:
        await seed_vector_store(pipeline.components.store, pipeline.components.embedder)
    return pipeline


def _print_documents(docs) -> None:
    if not docs:
        print("  (no documents)")
    for doc in docs:
        score = f"{doc.similarity:.3f}" if doc.similarity is not None else "-"
        print(f"  [{score}] {doc.law_type} มาตรา {doc.section} - {doc.title}")


def _run(coro) -> int:
    try:
        return asyncio.run(coro)
    except EmbeddingError as e:
        print(f"\nEmbedding failed: {e}", file=sys.stderr)
        return 1


# ---------------------------------------------------------------------------
# COMMANDS
# ---------------------------------------------------------------------------


def run_ask_cli() -> int:
    """CLI entry point for a model-grounded answer."""
    _load_env()

    parser = _common_parser("Answer a legal question from the corpus")
    parser.add_argument("question", help="Question text")
    args = parser.parse_args()
    _setup_logging(args.verbose)

    async def ask() -> int:
        pipeline = await _open_pipeline(args.mock)
        try:
            answer = await pipeline.answer_question(args.question)
        finally:
            await pipeline.close()
        print(answer)
        return 0

    return _run(ask())


def run_search_cli() -> int:
    """CLI entry point for similarity search."""
    _load_env()

    parser = _common_parser("Search the corpus for similar passages")
    parser.add_argument("query", help="Query text")
    parser.add_argument("--top-k", type=int, default=None, help="Documents to return")
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Minimum similarity (omit for no filtering)",
    )
    args = parser.parse_args()
    _setup_logging(args.verbose)

    async def search() -> int:
        pipeline = await _open_pipeline(args.mock)
        try:
            if args.threshold is None:
                docs = await pipeline.search_similar_docs(args.query, args.top_k)
            else:
                docs = await pipeline.search_relevant_docs(
                    args.query, args.top_k, args.threshold
                )
        finally:
            await pipeline.close()

        print("=" * 60)
        print(f"RESULTS FOR: {args.query}")
        print("=" * 60)
        _print_documents(docs)
        return 0

    return _run(search())


def run_cite_cli() -> int:
    """CLI entry point for the deterministic citation answer."""
    _load_env()

    parser = _common_parser("Cite relevant sections without calling a model")
    parser.add_argument("query", help="Query text")
    args = parser.parse_args()
    _setup_logging(args.verbose)

    async def cite() -> int:
        pipeline = await _open_pipeline(args.mock)
        try:
            docs = await pipeline.search_relevant_docs(args.query)
        finally:
            await pipeline.close()
        print(pipeline.generate_enhanced_answer(args.query, docs))
        return 0

    return _run(cite())


def run_chat_cli() -> int:
    """CLI entry point for one assistant reply with sources."""
    _load_env()

    parser = _common_parser("Ask the LAWDEE assistant")
    parser.add_argument("message", help="Message text")
    args = parser.parse_args()
    _setup_logging(args.verbose)

    async def chat() -> int:
        pipeline = await _open_pipeline(args.mock)
        try:
            reply = await pipeline.chat(args.message)
        finally:
            await pipeline.close()

        print(reply.text)
        if reply.sources:
            print("\nSources:")
            for source in reply.sources:
                print(f"  - {source.law_type} มาตรา {source.section} ({source.similarity}) {source.title}")
        return 0

    return _run(chat())


def run_seed_cli() -> int:
    """CLI entry point: create the schema and load the seed corpus into Postgres."""
    _load_env()

    parser = argparse.ArgumentParser(description="Create schema and load seed documents")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()
    _setup_logging(args.verbose)

    async def seed() -> int:
        from legal_search_pipeline.config import Settings
        from legal_search_pipeline.embeddings import get_embedding_provider
        from legal_search_pipeline.retrieval import get_vector_store, seed_vector_store

        settings = Settings.from_env()
        store = get_vector_store(settings, use_postgres=True)
        embeddings = get_embedding_provider(settings, use_mock=settings.use_mock)
        try:
            await store.create_schema()
            docs = await seed_vector_store(store, embeddings)
        finally:
            await store.close()
        print(f"Seeded {len(docs)} documents into {settings.table_name}")
        return 0

    return _run(seed())


def main() -> int:
    """
    Main CLI entry point with subcommands.

    Usage:
        legal-search ask "คำถาม"          # Model-grounded answer
        legal-search search "คำค้น"       # Nearest passages with scores
        legal-search cite "คำค้น"         # Citation answer, no model call
        legal-search chat "ข้อความ"       # Assistant reply with sources
        legal-search seed                 # Load seed corpus into Postgres
    """
    _load_env()

    parser = argparse.ArgumentParser(
        description="Legal document search and answering",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  ask       Answer a question grounded in retrieved sections
  search    List the nearest sections with similarity scores
  cite      Print cited sections without calling a model
  chat      One LAWDEE assistant reply with sources
  seed      Create the pgvector schema and load seed sections

Examples:
  legal-search ask "ผู้เช่าต้องจ่ายค่าเช่าหรือไม่" --mock
  legal-search search "ละเมิด" --top-k 5 --threshold 0.2
        """,
    )

    parser.add_argument(
        "command",
        choices=["ask", "search", "cite", "chat", "seed"],
        help="Command to run",
    )

    args, remaining = parser.parse_known_args()

    commands = {
        "ask": run_ask_cli,
        "search": run_search_cli,
        "cite": run_cite_cli,
        "chat": run_chat_cli,
        "seed": run_seed_cli,
    }

    # Re-inject remaining args for the subcommand
    sys.argv = [sys.argv[0]] + remaining

    try:
        return commands[args.command]()
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
