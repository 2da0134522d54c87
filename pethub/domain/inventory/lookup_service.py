"""
Product lookup by barcode against public product databases.

Open Food Facts is tried first (free, no key; good coverage of pet food). When it
has no match and a Barcode Lookup API key is configured, the paid API is tried.
Upstream failures never reach the caller: they are logged and treated as "not found".
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from ...config import (
    BARCODE_LOOKUP_BASE_URL,
    BARCODE_LOOKUP_TIMEOUT_SECONDS,
    OPEN_FOOD_FACTS_BASE_URL,
    OPEN_FOOD_FACTS_USER_AGENT,
)
from .schemas import BarcodeProduct

logger = logging.getLogger(__name__)


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def normalize_open_food_facts(data: Any, barcode: str) -> Optional[BarcodeProduct]:
    if not isinstance(data, dict):
        return None
    product = data.get("product")
    if not isinstance(product, dict):
        return None

    name = _str_or_none(product.get("product_name")) or _str_or_none(
        product.get("abbreviated_product_name")
    )
    if not name:
        return None

    return BarcodeProduct(
        name=name,
        brand=_str_or_none(product.get("brands")),
        category=_str_or_none(product.get("categories")),
        description=_str_or_none(product.get("generic_name")) or _str_or_none(product.get("_keywords")),
        image_url=_str_or_none(product.get("image_front_url")) or _str_or_none(product.get("image_url")),
        barcode=barcode,
    )


def normalize_barcode_lookup_api(data: Any, barcode: str) -> Optional[BarcodeProduct]:
    if not isinstance(data, dict):
        return None
    products = data.get("products")
    if not isinstance(products, list) or not products or not isinstance(products[0], dict):
        return None

    first = products[0]
    image_url = None
    images = first.get("images")
    if isinstance(images, list) and images:
        image = images[0]
        if isinstance(image, str):
            image_url = image or None
        elif isinstance(image, dict):
            image_url = _str_or_none(image.get("url"))

    return BarcodeProduct(
        name=_str_or_none(first.get("product_name")) or _str_or_none(first.get("title")) or "Unknown Product",
        brand=_str_or_none(first.get("brand")),
        category=_str_or_none(first.get("category")),
        description=_str_or_none(first.get("description")),
        image_url=image_url,
        barcode=barcode,
    )


def _json_or_empty(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {}


async def fetch_open_food_facts(client: httpx.AsyncClient, barcode: str) -> Optional[BarcodeProduct]:
    url = f"{OPEN_FOOD_FACTS_BASE_URL}/api/v2/product/{quote(barcode, safe='')}.json"
    try:
        response = await client.get(url, headers={"User-Agent": OPEN_FOOD_FACTS_USER_AGENT})
    except httpx.TimeoutException:
        logger.error(f"Open Food Facts lookup timed out for barcode {barcode}")
        return None
    except httpx.HTTPError as e:
        logger.error(f"Open Food Facts fetch error: {e}")
        return None

    return normalize_open_food_facts(_json_or_empty(response), barcode)


async def fetch_barcode_lookup(
    client: httpx.AsyncClient, barcode: str, api_key: str
) -> Optional[BarcodeProduct]:
    url = f"{BARCODE_LOOKUP_BASE_URL}/v3/products"
    params = {"barcode": barcode, "formatted": "y", "key": api_key}
    try:
        response = await client.get(url, params=params)
    except httpx.TimeoutException:
        logger.error(f"Barcode Lookup API timed out for barcode {barcode}")
        return None
    except httpx.HTTPError as e:
        logger.error(f"Barcode Lookup API fetch error: {e}")
        return None

    return normalize_barcode_lookup_api(_json_or_empty(response), barcode)


async def lookup_product(
    barcode: str,
    client: Optional[httpx.AsyncClient] = None,
    api_key: Optional[str] = None,
) -> Optional[BarcodeProduct]:
    """Look a validated barcode up in each configured provider, in order"""
    if client is None:
        async with httpx.AsyncClient(timeout=BARCODE_LOOKUP_TIMEOUT_SECONDS) as owned_client:
            return await lookup_product(barcode, owned_client, api_key)

    product = await fetch_open_food_facts(client, barcode)
    if product:
        logger.info(f"Barcode {barcode} found in Open Food Facts")
        return product

    if api_key:
        product = await fetch_barcode_lookup(client, barcode, api_key)
        if product:
            logger.info(f"Barcode {barcode} found in Barcode Lookup API")
            return product

    logger.info(f"Barcode {barcode} not found in any provider")
    return None
