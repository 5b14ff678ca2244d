"""
sss-recover Web API.

JSON endpoints backed by the sss_recover library. Secrets and share
values are returned as decimal strings so big integers survive JSON.
"""

import logging
import sys
from pathlib import Path

from aiohttp import web

# Ensure sss_recover is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sss_recover import recovery
from sss_recover.radix import to_decimal
from sss_recover.recovery import DEFAULT_PRIME, Mode, ReconstructionConfig
from sss_recover.shares import describe, validate_share_set


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# API handlers
# ---------------------------------------------------------------------------

async def api_reconstruct(request: web.Request) -> web.Response:
    """
    POST /api/reconstruct
    Body JSON: { shares: {keys: {n, k}, "<x>": {base, value}, ...},
                 mode?: "exact"|"modular", modulus?: str|int, strict?: bool }

    Modular mode without a modulus uses the secp256k1 field prime.

    Returns: { ok, secret, mode, modulus?, n, k, used, dropped }
    """
    try:
        data = await request.json()
    except Exception:
        return _err("Invalid JSON body", 400)

    if not isinstance(data, dict) or "shares" not in data:
        return _err("Missing shares", 400)

    options = {
        'mode': data.get("mode", Mode.EXACT.value),
        'modulus': data.get("modulus"),
        'strict': data.get("strict", False),
    }
    try:
        if Mode.parse(options['mode']) is Mode.MODULAR and options['modulus'] is None:
            options['modulus'] = DEFAULT_PRIME
        config = ReconstructionConfig.from_dict(options)
        share_set = validate_share_set(data["shares"])
        secret = recovery.reconstruct_with(share_set, config)
        result = describe(share_set)
        result.update(config.to_dict())
    except ValueError as exc:
        return _err(f"Reconstruction failed: {exc}", 400)

    result["ok"] = True
    result["secret"] = to_decimal(secret)
    return web.json_response(result)


async def api_inspect(request: web.Request) -> web.Response:
    """
    POST /api/inspect
    Body JSON: { shares: {keys: {n, k}, ...} }

    Returns: { ok, n, k, used, dropped }
    """
    try:
        data = await request.json()
    except Exception:
        return _err("Invalid JSON body", 400)

    if not isinstance(data, dict) or "shares" not in data:
        return _err("Missing shares", 400)

    try:
        result = recovery.inspect_share_set(data["shares"])
    except ValueError as exc:
        return _err(f"Inspection failed: {exc}", 400)

    result["ok"] = True
    return web.json_response(result)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _err(msg: str, status: int = 400) -> web.Response:
    logger.info("Request rejected: %s", msg)
    return web.json_response({"ok": False, "error": msg}, status=status)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app() -> web.Application:
    app = web.Application(client_max_size=1024 * 1024)  # 1 MB payloads

    app.router.add_post("/api/reconstruct", api_reconstruct)
    app.router.add_post("/api/inspect", api_inspect)

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app = create_app()
    print("sss-recover API: http://localhost:8787")
    web.run_app(app, host="0.0.0.0", port=8787)
