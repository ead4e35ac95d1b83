"""
Preview similarity ranking for a query without a database.

Usage:
    python scripts/qa/rank_preview.py "cuando sera el examen"
    python scripts/qa/rank_preview.py "cuando sera el examen" --bank data/catalog.json --all
"""

import argparse
import json
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from dotenv import load_dotenv
load_dotenv()


def main():
    from faq_assistant.engines.category_detector import detect_category
    from faq_assistant.engines.ranker import candidate_ranker
    from faq_assistant.engines.similarity import similarity_breakdown
    from faq_assistant.engines.topic_grouper import detect_main_topic
    from faq_assistant.schemas import Question

    parser = argparse.ArgumentParser(description="Show ranked candidates for a query")
    parser.add_argument("query")
    parser.add_argument("--bank", default="data/catalog.json")
    parser.add_argument("--all", action="store_true", help="Print every score, not only kept candidates")
    args = parser.parse_args()

    with open(args.bank, "r", encoding="utf-8") as f:
        bank = [Question.model_validate(q) for q in json.load(f).get("questions", [])]

    print(f"Category: {detect_category(args.query)}")

    if args.all:
        for item in candidate_ranker.score(args.query, bank):
            parts = similarity_breakdown(args.query, item.question.question)
            print(
                f"  {item.similarity:.3f} [{detect_main_topic(item.question.question)}] "
                f"{item.question.question}  (words={parts.word_overlap:.2f} "
                f"sub={parts.substring:.1f} kw={parts.keyword:.1f} len={parts.length_penalty:.2f})"
            )
        print()

    ranked = candidate_ranker.rank_scored(args.query, bank)
    if not ranked:
        print("No candidates above threshold")
    for i, item in enumerate(ranked, 1):
        print(f"{i}. {item.similarity:.3f} {item.question.question}")


if __name__ == "__main__":
    main()
