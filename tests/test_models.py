from app.db_models import TitleRecord
from app.models import CatalogPage, TitleItem, UserRecommendations


def _record(**overrides) -> TitleRecord:
    fields = {
        "show_id": "s42",
        "type": "Movie",
        "title": "Night Walk",
        "rating": "PG",
        "horror_movies": 1,
        "dramas": 1,
    }
    fields.update(overrides)
    return TitleRecord(**fields)


def test_title_item_from_record_uses_primary_genre():
    item = TitleItem.from_record(_record())

    assert item.genre == "Drama"
    assert item.genres == ["Drama", "Horror"]
    assert item.title == "Night Walk"


def test_title_item_display_genre_overrides_primary():
    item = TitleItem.from_record(_record(), display_genre="Horror")

    assert item.genre == "Horror"


def test_title_item_fills_missing_metadata():
    item = TitleItem.from_record(
        _record(title=None, description=None, director=None, release_year=None)
    )

    assert item.title == "Unknown Title"
    assert item.description == "No description available"
    assert item.director == "Unknown Director"
    assert item.release_year == 0


def test_payloads_serialise_with_camel_case_aliases():
    item = TitleItem(show_id="s1", genre="Action", image_url="https://example.com/a.jpg")
    page = CatalogPage(items=[item], total_count=1, total_pages=1, page=1, page_size=10)
    bundle = UserRecommendations(location_based=[item])

    page_payload = page.model_dump(mode="json", by_alias=True)
    assert set(page_payload) == {"items", "totalCount", "totalPages", "page", "pageSize"}
    assert page_payload["items"][0]["imageUrl"] == "https://example.com/a.jpg"
    assert page_payload["items"][0]["showId"] == "s1"

    bundle_payload = bundle.model_dump(by_alias=True)
    assert set(bundle_payload) == {"locationBased", "general", "streamingBased"}
    assert bundle_payload["general"] == []
