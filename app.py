"""
Dictionary Service: a REST API over the word/definition trie.

Exposes a single process-wide Dictionary as a JSON API with endpoints for
adding and removing words, looking up definitions, counting words under a
prefix, and the one-way compression step.  Built with Flask.
"""

from __future__ import annotations

import os
import threading
import time
import logging

from flask import Flask, jsonify, request

from dictionary import Dictionary

MAX_WORD_LENGTH = 256

app = Flask(__name__)
logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger("dictionary-service")

# Global dictionary instance, persists for the lifetime of the process.
# Flask serves requests on threads; every dictionary call holds the lock.
dictionary = Dictionary()
_lock = threading.Lock()
_start_time = time.time()

# Seed with sample data so the service is useful out-of-the-box
_SEED_ENTRIES = {
    "cache": "a store of data kept for fast repeated access",
    "callback": "a function passed to be invoked later",
    "car": "a road vehicle",
    "care": "serious attention",
    "cart": "a wheeled container",
    "cat": "a small domesticated feline",
    "compiler": "a program that translates source code",
    "parse": "to analyse a string into its parts",
    "parser": "a program that parses",
    "prefix": "a leading part of a word",
    "tree": "a hierarchical data structure",
    "trie": "a tree keyed by the characters of words",
}

for word, definition in _SEED_ENTRIES.items():
    dictionary.add(word, definition)
logger.info("Seeded dictionary with %d words", len(_SEED_ENTRIES))

if os.environ.get("DICTIONARY_COMPRESS", "0") == "1":
    dictionary.compress()
    logger.info("Compressed seeded dictionary to %d nodes", dictionary.node_count())


def _query_word() -> str:
    return request.args.get("q", "").strip()


def _frozen_response():
    return jsonify({"error": "Dictionary is compressed and read-only"}), 409


# ── Health & Info ─────────────────────────────────────────────────────────

@app.route("/")
def index():
    """Landing page with API documentation."""
    return jsonify({
        "service": "Dictionary Service",
        "version": "1.0.0",
        "description": "REST API for word definitions and prefix counts backed by a trie",
        "endpoints": {
            "GET  /":                  "This help page",
            "GET  /health":            "Health check",
            "GET  /stats":             "Dictionary statistics",
            "GET  /lookup?q=<word>":   "Definition of a word",
            "GET  /sequence?q=<word>": "Compressed labels spelling a word",
            "GET  /count?q=<prefix>":  "Number of words starting with prefix",
            "POST /add":               "Add a word  {\"word\": \"...\", \"definition\": \"...\"}",
            "DELETE /remove?q=<word>": "Remove a word",
            "POST /compress":          "Compress the trie; disables add/remove",
        },
    })


@app.route("/health")
def health():
    """Liveness / readiness probe."""
    with _lock:
        size = len(dictionary)
    return jsonify({
        "status": "healthy",
        "uptime_seconds": round(time.time() - _start_time, 2),
        "words": size,
    })


@app.route("/stats")
def stats():
    """Dictionary statistics."""
    with _lock:
        body = {
            "total_words": len(dictionary),
            "nodes": dictionary.node_count(),
            "compressed": dictionary.compressed,
        }
    body["uptime_seconds"] = round(time.time() - _start_time, 2)
    return jsonify(body)


# ── Core API ──────────────────────────────────────────────────────────────

@app.route("/lookup")
def lookup():
    """Exact word lookup."""
    q = _query_word()
    if not q:
        return jsonify({"error": "Missing query parameter 'q'"}), 400
    with _lock:
        definition = dictionary.lookup(q)
    return jsonify({"word": q, "found": definition is not None, "definition": definition})


@app.route("/sequence")
def sequence():
    """Compressed edge labels along a word, e.g. ``ca-re``."""
    q = _query_word()
    if not q:
        return jsonify({"error": "Missing query parameter 'q'"}), 400
    with _lock:
        if not dictionary.compressed:
            return jsonify({"error": "Sequences are only available after compression"}), 409
        result = dictionary.sequence(q)
    return jsonify({"word": q, "found": result is not None, "sequence": result})


@app.route("/count")
def count():
    """Number of stored words sharing a prefix; all words for an empty one."""
    q = _query_word()
    with _lock:
        n = dictionary.count_prefix(q)
    return jsonify({"prefix": q, "count": n})


@app.route("/add", methods=["POST"])
def add():
    """Add a word, replacing its definition if already present."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}
    word = body.get("word", "")
    definition = body.get("definition", "")

    if not isinstance(word, str) or not word.strip():
        return jsonify({"error": "Missing 'word' in request body"}), 400
    word = word.strip()
    if len(word) > MAX_WORD_LENGTH:
        return jsonify({"error": f"Word too long (max {MAX_WORD_LENGTH} chars)"}), 400
    if not isinstance(definition, str):
        return jsonify({"error": "'definition' must be a string"}), 400

    with _lock:
        if dictionary.compressed:
            return _frozen_response()
        dictionary.add(word, definition)
        size = len(dictionary)
    logger.info("Added word=%s", word)
    return jsonify({"added": word, "definition": definition, "words": size}), 201


@app.route("/remove", methods=["DELETE"])
def remove():
    """Remove a word."""
    q = _query_word()
    if not q:
        return jsonify({"error": "Missing query parameter 'q'"}), 400

    with _lock:
        if dictionary.compressed:
            return _frozen_response()
        removed = dictionary.remove(q)
        size = len(dictionary)
    if removed:
        logger.info("Removed word=%s", q)
    status = 200 if removed else 404
    return jsonify({"word": q, "removed": removed, "words": size}), status


@app.route("/compress", methods=["POST"])
def compress():
    """Compress the trie.  Repeated calls leave it unchanged."""
    with _lock:
        before = dictionary.node_count()
        dictionary.compress()
        after = dictionary.node_count()
    logger.info("Compressed dictionary: %d -> %d nodes", before, after)
    return jsonify({"compressed": True, "nodes_before": before, "nodes_after": after})


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    debug = os.environ.get("FLASK_DEBUG", "0") == "1"
    logger.info("Starting Dictionary Service on port %d", port)
    app.run(host="0.0.0.0", port=port, debug=debug)
