"""Sample catalog generator with deterministic seeding.

Generates categories and products for development and demos. Uses a
seeded random so the same seed always yields the same catalog.
"""

import hashlib
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from html import escape

from storefront.catalog.models import Category, Product, slugify


# ============================================================================
# Constants
# ============================================================================

CATEGORY_NAMES = [
    "Fantasy",
    "Mystery",
    "Science Fiction",
    "Adventure",
    "Romance",
]

# Price ranges by category (in cents)
PRICE_RANGES: dict[str, tuple[int, int]] = {
    "Fantasy": (499, 2499),
    "Mystery": (399, 1999),
    "Science Fiction": (599, 2999),
    "default": (299, 1499),
}

TITLE_TEMPLATES = [
    "The {adj} {noun}",
    "{noun} of the {adj} Coast",
    "A {adj} {noun}",
    "Beyond the {adj} {noun}",
]

ADJECTIVES = [
    "Silent", "Crimson", "Hidden", "Last", "Forgotten", "Golden",
    "Northern", "Broken", "Wandering", "Midnight", "Distant", "Iron",
]

NOUNS = [
    "Lantern", "Harbor", "Archive", "Garden", "Signal", "Crown",
    "Voyage", "Orchard", "Engine", "Letter", "Tower", "River",
]

SENTENCES = [
    "A quiet town wakes to find its clocks running backwards.",
    "Two strangers share a train compartment and a secret neither can keep.",
    "The map was wrong on purpose, and only one reader noticed.",
    "Every lighthouse on the coast went dark on the same night.",
    "She inherited a bookshop with one locked room and no key.",
    "The expedition returned with one more member than it left with.",
    "An old radio picks up a broadcast from a station closed for decades.",
    "Nobody remembers planting the orchard, yet it bears fruit every winter.",
]

PHOTO_COLORS = ["#264653", "#2a9d8f", "#e9c46a", "#f4a261", "#e76f51", "#6d597a"]


# ============================================================================
# Generator Configuration
# ============================================================================


@dataclass
class GeneratorConfig:
    """Configuration for catalog generation.

    Attributes:
        seed: Random seed for reproducibility.
        products_per_category: Number of products per category.
        include_photos: Whether to attach placeholder photos.
    """

    seed: int = 42
    products_per_category: int = 4
    include_photos: bool = True


# ============================================================================
# Catalog Generator
# ============================================================================


class CatalogGenerator:
    """Generates a sample catalog with deterministic seeding.

    Example usage:
        generator = CatalogGenerator(GeneratorConfig(seed=7))
        categories, products = generator.generate()
    """

    def __init__(self, config: GeneratorConfig) -> None:
        """Initialize generator with configuration.

        Args:
            config: Generator configuration.
        """
        self.config = config
        self._used_slugs: set[str] = set()
        self._epoch = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self._counter = 0

    def _deterministic_seed(self, *args: str | int) -> int:
        """Create deterministic seed from arguments."""
        data = "|".join(str(a) for a in args)
        hash_bytes = hashlib.md5(data.encode()).digest()
        return int.from_bytes(hash_bytes[:4], "big")

    def _deterministic_id(self, *args: str | int) -> str:
        """Create deterministic UUID-shaped identifier."""
        data = "|".join(str(a) for a in args)
        digest = hashlib.md5(data.encode()).hexdigest()
        return f"{digest[:8]}-{digest[8:12]}-{digest[12:16]}-{digest[16:20]}-{digest[20:32]}"

    def _unique_slug(self, name: str) -> str:
        """Slugify a name, suffixing a counter on collision."""
        base = slugify(name)
        slug = base
        suffix = 2
        while slug in self._used_slugs:
            slug = f"{base}-{suffix}"
            suffix += 1
        self._used_slugs.add(slug)
        return slug

    def _price(self, category_name: str, rng: random.Random) -> Decimal:
        """Pick a price ending in .99 from the category range."""
        low, high = PRICE_RANGES.get(category_name, PRICE_RANGES["default"])
        cents = (rng.randint(low, high) // 100) * 100 + 99
        return Decimal(cents) / 100

    def _description(self, rng: random.Random) -> str:
        """Compose a description of three to six sentences."""
        count = rng.randint(3, 6)
        paragraph = " ".join(rng.sample(SENTENCES, count))
        if count > 4:
            # Long descriptions get a second paragraph line
            head, _, tail = paragraph.partition(". ")
            return f"{head}.\n{tail}"
        return paragraph

    def _photo(self, title: str, rng: random.Random) -> bytes:
        """Render a placeholder SVG cover."""
        color = rng.choice(PHOTO_COLORS)
        svg = (
            '<svg xmlns="http://www.w3.org/2000/svg" width="350" height="300">'
            f'<rect width="100%" height="100%" fill="{color}"/>'
            '<text x="50%" y="50%" text-anchor="middle" fill="#ffffff" '
            f'font-family="serif" font-size="20">{escape(title)}</text>'
            "</svg>"
        )
        return svg.encode()

    def generate(self) -> tuple[list[Category], list[Product]]:
        """Generate categories and products.

        Products are timestamped one minute apart in generation order so
        natural order is stable.

        Returns:
            Tuple of (categories, products).
        """
        categories: list[Category] = []
        products: list[Product] = []

        for category_name in CATEGORY_NAMES:
            category = Category(
                id=self._deterministic_id(self.config.seed, "category", category_name),
                name=category_name,
                slug=slugify(category_name),
            )
            categories.append(category)

            for i in range(self.config.products_per_category):
                rng = random.Random(self._deterministic_seed(self.config.seed, category_name, i))
                title = rng.choice(TITLE_TEMPLATES).format(
                    adj=rng.choice(ADJECTIVES),
                    noun=rng.choice(NOUNS),
                )
                product = Product(
                    id=self._deterministic_id(self.config.seed, category_name, i),
                    slug=self._unique_slug(title),
                    name=title,
                    description=self._description(rng),
                    price=self._price(category_name, rng),
                    category=category,
                    created_at=self._epoch + timedelta(minutes=self._counter),
                )
                if self.config.include_photos:
                    product.photo_data = self._photo(title, rng)
                    product.photo_content_type = "image/svg+xml"
                products.append(product)
                self._counter += 1

        return categories, products
