"""Slug and meta tag generation for catalog pages."""

import re
from typing import Callable

from apps.accounting.services.money import format_currency

SITE_NAME = 'DD Cars'


def generate_slug(brand: str, model: str, year: int) -> str:
    """
    Build a URL slug such as ``volkswagen-golf-gti-2019``.

    Characters other than ``a-z``, digits, spaces and hyphens are dropped,
    whitespace becomes a hyphen and hyphen runs collapse to one.
    """
    slug = f"{brand}-{model}-{year}".lower()
    slug = re.sub(r'[^a-z0-9\s-]', '', slug)
    slug = re.sub(r'\s+', '-', slug)
    slug = re.sub(r'-+', '-', slug)
    return slug.strip('-')


def generate_unique_slug(
    brand: str,
    model: str,
    year: int,
    exists: Callable[[str], bool]
) -> str:
    """
    Return the base slug, or the first of ``<slug>-1``, ``<slug>-2``, ...
    for which ``exists`` is False.
    """
    base_slug = generate_slug(brand, model, year)
    if not exists(base_slug):
        return base_slug

    counter = 1
    while exists(f"{base_slug}-{counter}"):
        counter += 1
    return f"{base_slug}-{counter}"


def generate_meta_title(brand: str, model: str, year: int, price) -> str:
    formatted_price = format_currency(price, decimals=0)
    return f"{brand} {model} {year} - {formatted_price} | {SITE_NAME} Premium Occasions"


def generate_meta_description(
    brand: str,
    model: str,
    year: int,
    mileage: int,
    fuel: str,
    transmission: str
) -> str:
    formatted_mileage = f"{mileage:,}".replace(',', '.')
    return (
        f"{brand} {model} {year} te koop bij {SITE_NAME}. "
        f"{formatted_mileage} km, {fuel}, {transmission}. "
        f"Premium occasions met kwaliteitsgarantie. Bekijk nu!"
    )
