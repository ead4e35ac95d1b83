"""
Load the category catalog and question bank into MongoDB.

Usage:
    python scripts/db/seed_catalog.py data/catalog.json
    python scripts/db/seed_catalog.py data/catalog.json --replace-questions
    python scripts/db/seed_catalog.py data/catalog.json --admin-email a@b.mx --admin-password secret

JSON layout:
    {"categories": [{slug, title, description, documents, subjects}],
     "questions":  [{question, answer}]}
"""

import argparse
import json
import os
import sys

from dotenv import load_dotenv
from pymongo import MongoClient

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

load_dotenv()


def seed(path: str, replace_questions: bool, admin_email: str = None, admin_password: str = None):
    from faq_assistant.config import Config
    from faq_assistant.utils.auth_utils import hash_password

    if not Config.MONGO_URI:
        print("MONGO_URI not found in .env")
        sys.exit(1)

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    client = MongoClient(Config.MONGO_URI, serverSelectionTimeoutMS=Config.MONGO_TIMEOUT_MS)
    db = client[Config.MONGO_DB_NAME]

    categories = data.get("categories", [])
    for category in categories:
        db[Config.CATEGORIES_COLLECTION].replace_one(
            {"slug": category["slug"]}, category, upsert=True
        )
    print(f"Upserted {len(categories)} categories")

    questions = [
        {"question": q["question"], "answer": q["answer"]}
        for q in data.get("questions", [])
    ]
    if replace_questions:
        deleted = db[Config.QUESTIONS_COLLECTION].delete_many({}).deleted_count
        print(f"Removed {deleted} existing questions")
    if questions:
        db[Config.QUESTIONS_COLLECTION].insert_many(questions)
    print(f"Inserted {len(questions)} questions")

    if admin_email and admin_password:
        email = admin_email.strip().lower()
        db[Config.ADMIN_USERS_COLLECTION].update_one(
            {"email": email},
            {"$set": {"email": email, "password": hash_password(admin_password)}},
            upsert=True,
        )
        print(f"Admin user ready: {email}")

    client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed categories and question bank")
    parser.add_argument("path", help="JSON file with categories and questions")
    parser.add_argument("--replace-questions", action="store_true", help="Drop the current question bank first")
    parser.add_argument("--admin-email")
    parser.add_argument("--admin-password")
    args = parser.parse_args()

    seed(args.path, args.replace_questions, args.admin_email, args.admin_password)
