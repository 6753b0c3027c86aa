from collections.abc import Mapping

from hotel_intel.mappers.metrics import as_list, as_number, dig
from hotel_intel.mappers.report_defaults import OTA_PLATFORMS, PLATFORM_LINKS
from hotel_intel.schemas.report import GroundingSource, PlatformLink, RatingCard


def rating_band(score: float, max_score: int) -> str | None:
    """Colour band of a rating bar: excellent >= 80%, good >= 60%."""
    if score <= 0:
        return None
    if score >= max_score * 0.8:
        return "excellent"
    if score >= max_score * 0.6:
        return "good"
    return "poor"


def build_rating_cards(report: Mapping) -> list[RatingCard]:
    ratings = dig(report, "ota_ratings", default={})
    cards: list[RatingCard] = []

    for key, label, max_score in OTA_PLATFORMS:
        entry = ratings.get(key) if isinstance(ratings, Mapping) else None
        score = as_number(dig(entry, "score"))
        if score <= 0:
            cards.append(RatingCard(platform=key, label=label, max_score=max_score))
            continue

        cards.append(RatingCard(
            platform=key,
            label=label,
            score=score,
            count=int(as_number(dig(entry, "count"))),
            max_score=max_score,
            percentage=score / max_score * 100,
            band=rating_band(score, max_score),
        ))

    return cards


def build_platform_links(report: Mapping) -> list[PlatformLink]:
    links = dig(report, "external_links", default={})
    if not isinstance(links, Mapping):
        return []
    return [
        PlatformLink(label=label, url=links[key])
        for label, key in PLATFORM_LINKS
        if isinstance(links.get(key), str) and links[key].strip()
    ]


def extract_grounding_sources(response: Mapping) -> list[GroundingSource]:
    """Flatten the citation chunks of a grounded generateContent response."""
    candidates = as_list(dig(response, "candidates"))
    if not candidates:
        return []

    chunks = as_list(dig(candidates[0], "groundingMetadata", "groundingChunks"))
    sources: list[GroundingSource] = []
    for chunk in chunks:
        uri = dig(chunk, "web", "uri")
        if not uri:
            continue
        title = dig(chunk, "web", "title") or uri
        sources.append(GroundingSource(title=str(title), uri=str(uri)))
    return sources
