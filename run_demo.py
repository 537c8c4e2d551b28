# ======================================================
# run_demo.py
# ======================================================
import os

from docid import DocumentIDGenerator

SAMPLE_DOCUMENTS = [
    "Translate the following from French to English:",
    "Summarize this article about machine learning in three sentences",
    "Write a Python function that parses ISO dates",
    "Translate the following from English to Spanish:",
    "Explain how AI and ML models are evaluated",
    "   ",
    "Write a Python function that parses ISO dates",
    "is are be was of in",
]

CACHE_PATH = os.path.join("data", "demo_doc_word_count.csv")


def generate_from_sample():
    print("=== Generating IDs for sample documents ===")

    generator = DocumentIDGenerator(min_id_length=20)
    ids = generator.generate_ids(SAMPLE_DOCUMENTS)

    for i, (doc_id, doc) in enumerate(zip(ids, SAMPLE_DOCUMENTS)):
        print(f"{i}\t{doc_id}\t{doc!r}")

    print(f"Vocabulary size: {len(generator.vocabulary)} unique words.")
    print(f"Corpus mean word frequency: {generator.corpus_mean:.2f}")

    generator.cache_frequencies(CACHE_PATH)
    print(f"Word frequencies cached to {CACHE_PATH}")

    return ids


def reload_from_cache(expected):
    print("=== Regenerating IDs from the cached word frequencies ===")

    generator = DocumentIDGenerator(min_id_length=20)
    ids = generator.generate_ids(SAMPLE_DOCUMENTS, CACHE_PATH)

    if ids == expected:
        print("Same IDs as the first run.")
    else:
        for before, after in zip(expected, ids):
            if before != after:
                print(f"{before}\t->\t{after}")


if __name__ == "__main__":
    ids = generate_from_sample()
    reload_from_cache(ids)
