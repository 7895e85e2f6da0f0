"""
Bulk-load interview questions from a JSON file into the question bank.

    projectforge-load-questions sample-questions.json
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from core.database import init_db
from core.errors import AppError
from core.logging_config import setup_logging
from stores.documents import DocumentStore
from stores.interview import QuestionStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Load interview questions into the question bank.")
    parser.add_argument("file", type=Path, help="JSON file holding an array of question objects")
    return parser


def main(argv: Optional[List[str]] = None, documents: Optional[DocumentStore] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        questions = json.loads(args.file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Error reading %s: %s", args.file, e)
        return 1
    if not isinstance(questions, list):
        logger.error("Error during bulk load: %s must contain a JSON array", args.file)
        return 1

    if documents is None:
        init_db()
        documents = DocumentStore()

    try:
        count = QuestionStore(documents).bulk_load(questions)
    except AppError as e:
        logger.error("Error during bulk load: %s", e.message)
        return 1

    logger.info("Successfully uploaded %d questions", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
