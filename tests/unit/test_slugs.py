from storefront.services.slugs import slugify


def test_slugify_joins_words_with_hyphens() -> None:
    assert slugify("  Summer Sale: Linen Shirts!  ") == "summer-sale-linen-shirts"


def test_slugify_strips_accents() -> None:
    assert slugify("Crème Brûlée Café") == "creme-brulee-cafe"
