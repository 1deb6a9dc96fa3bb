# MIT License
# Copyright (c) 2025 Hashborn

"""
Reporting Bridge (Subscan)

Fetches independent supply figures and the latest block hash from the
Subscan scan API. Payloads are validated strictly; the numbers themselves
are never checked against the computed summary.
"""

import os
import logging
from typing import Optional, Type

import requests
from pydantic import BaseModel, ValidationError

from ...protocol.types.reporting import BlockListResponse, BlockSummary, TokenDetail, TokenInfoResponse
from ...protocol.types.common import RemoteConnectionError, SchemaValidationError, TransientIOError
from ...protocol.config.params import NetworkConfig, current_network

logger = logging.getLogger(__name__)

def _headers() -> dict:
    headers = {"Content-Type": "application/json"}
    api_key = os.environ.get("SUBSCAN_API_KEY")
    if api_key:
        headers["X-API-Key"] = api_key
    return headers

def _parse(resp: requests.Response, model: Type[BaseModel]):
    try:
        body = resp.json()
    except ValueError as e:
        raise SchemaValidationError(f"{resp.url}: response is not JSON: {e}") from e
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise SchemaValidationError(f"{resp.url}: {e}") from e

def _request(method: str, url: str, timeout: float, **kwargs) -> requests.Response:
    try:
        resp = requests.request(method, url, headers=_headers(), timeout=timeout, **kwargs)
    except (requests.ConnectionError, requests.Timeout) as e:
        raise RemoteConnectionError(f"Cannot reach {url}: {e}") from e
    if resp.status_code != 200:
        raise TransientIOError(f"{url} returned HTTP {resp.status_code}: {resp.text[:200]}")
    return resp

def get_token_info(config: Optional[NetworkConfig] = None) -> TokenDetail:
    """
    Token supply figures as reported by Subscan.

    Raises:
        SchemaValidationError: If the payload or the token's balance object is malformed/missing
    """
    config = config or current_network()
    url = f"{config.subscan_base_url}/api/scan/token"
    resp = _request("GET", url, config.request_timeout)
    parsed = _parse(resp, TokenInfoResponse)

    detail = parsed.data.detail.get(config.token_symbol)
    if detail is None:
        raise SchemaValidationError(f"{url}: no '{config.token_symbol}' entry in data.detail")
    return detail

def get_latest_block(config: Optional[NetworkConfig] = None) -> BlockSummary:
    """
    Most recent block known to Subscan.

    Raises:
        SchemaValidationError: If the payload is malformed or lists no blocks
    """
    config = config or current_network()
    url = f"{config.subscan_base_url}/api/scan/blocks"
    resp = _request("POST", url, config.request_timeout, json={"page": 0, "row": 1})
    parsed = _parse(resp, BlockListResponse)

    if not parsed.data.blocks:
        raise SchemaValidationError(f"{url}: block list is empty")
    block = parsed.data.blocks[0]
    logger.info(f"Latest Subscan block: #{block.block_num} {block.hash} (finalized={block.finalized})")
    return block
