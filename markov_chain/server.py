"""
Markov chain generation server.

Exposes a trained TextChain through a small REST API modelled on the Ollama
API format, so existing Ollama clients can request generated sentences.

Endpoints:
    GET  /               - server info
    GET  /api/tags       - the single served "model"
    POST /api/generate   - generate sentences (optionally streamed as NDJSON)
    GET  /health         - health check
"""

from __future__ import annotations

import json
import logging
import time
from typing import Generator, Optional

from flask import Flask, Response, jsonify, request

from .text import TextChain

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "model_id": "markov-chain",
    "max_sentences": 100,
    "host": "127.0.0.1",
    "port": 11435,
}


def generate_sentences(chain: TextChain, prompt: str, count: int) -> Generator[str, None, None]:
    """Yield ``count`` sentences; a prompt seeds each one with its first word."""
    words = prompt.split()
    if not words:
        yield from chain.str_iter_for(count)
        return
    for _ in range(count):
        yield chain.generate_str_from_token(words[0])


def create_app(chain: TextChain, config: Optional[dict] = None) -> Flask:
    app = Flask(__name__)
    settings = dict(DEFAULT_CONFIG)
    settings.update(config or {})
    app.config["MARKOV"] = settings

    @app.route('/api/tags', methods=['GET'])
    def list_models():
        """The served chain, listed as a single model."""
        return jsonify({
            "models": [
                {
                    "name": settings["model_id"],
                    "model": settings["model_id"],
                    "modified_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
                    "size": len(chain),
                    "details": {
                        "format": "markov",
                        "family": "markov",
                        "order": chain.order,
                    }
                }
            ]
        })

    @app.route('/api/generate', methods=['POST'])
    def api_generate():
        """
        Generate sentences (Ollama API compatible)

        Body:
            prompt: string (optional, its first word seeds every sentence)
            stream: bool (default: false)
            options:
                num_predict: int (number of sentences, default 1)
        """
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400
        prompt = data.get('prompt') or ''
        stream = data.get('stream', False)
        options = data.get('options') or {}
        if not isinstance(prompt, str):
            return jsonify({"error": "prompt must be a string"}), 400
        if not isinstance(options, dict):
            return jsonify({"error": "options must be a JSON object"}), 400
        count = options.get('num_predict', 1)

        if not isinstance(count, int) or isinstance(count, bool) or count < 1:
            return jsonify({"error": "options.num_predict must be a positive integer"}), 400
        if count > settings["max_sentences"]:
            return jsonify({"error": f"options.num_predict is limited to {settings['max_sentences']}"}), 400
        seeded = bool(prompt.split())
        # seeded generation on an untrained chain just yields empty sentences
        if not seeded and chain.is_empty():
            return jsonify({"error": "The chain has not been trained"}), 409

        logger.info(f"generate: count={count} seeded={seeded} stream={bool(stream)}")

        if stream:
            def generate():
                for sentence in generate_sentences(chain, prompt, count):
                    yield json.dumps({
                        "model": settings["model_id"],
                        "response": sentence + "\n",
                        "done": False
                    }) + "\n"
                yield json.dumps({
                    "model": settings["model_id"],
                    "response": "",
                    "done": True
                }) + "\n"

            return Response(generate(), mimetype='application/x-ndjson')

        started = time.perf_counter()
        sentences = list(generate_sentences(chain, prompt, count))
        return jsonify({
            "model": settings["model_id"],
            "response": "\n".join(sentences),
            "done": True,
            "total_duration": int((time.perf_counter() - started) * 1e9),
        })

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint"""
        return jsonify({
            "status": "ok",
            "model": settings["model_id"],
            "order": chain.order,
            "windows": len(chain),
            "empty": chain.is_empty(),
        })

    @app.route('/', methods=['GET'])
    def index():
        return jsonify({
            "name": "Markov chain server",
            "version": "1.0.0",
            "model": settings["model_id"],
            "endpoints": [
                "/api/tags - served models",
                "/api/generate - generate sentences",
                "/health - health check"
            ]
        })

    return app


def serve(chain: TextChain, config: Optional[dict] = None) -> None:
    app = create_app(chain, config)
    settings = app.config["MARKOV"]
    logger.info(f"Serving {settings['model_id']} on http://{settings['host']}:{settings['port']}")
    app.run(host=settings["host"], port=settings["port"], threaded=False)
