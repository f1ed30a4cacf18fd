"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "행성 카탈로그",
        "en": "PlanetCatalog",
    },
    "label_search": {
        "ko": "행성 이름",
        "en": "Planet name",
    },
    "placeholder_search": {
        "ko": "예: Tatooine",
        "en": "e.g. Tatooine",
    },
    "btn_search": {
        "ko": "검색",
        "en": "Search",
    },
    "btn_reset": {
        "ko": "↺ 초기화",
        "en": "↺ Reset",
    },
    "btn_load_more": {
        "ko": "더 불러오기",
        "en": "Load more",
    },
    "label_sort": {
        "ko": "정렬 기준",
        "en": "Sort by",
    },
    "label_order": {
        "ko": "순서",
        "en": "Order",
    },
    "sort_population": {
        "ko": "인구",
        "en": "Population",
    },
    "sort_distance_from_sun": {
        "ko": "항성과의 거리",
        "en": "Distance from sun",
    },
    "order_asc": {
        "ko": "오름차순",
        "en": "Ascending",
    },
    "order_desc": {
        "ko": "내림차순",
        "en": "Descending",
    },
    "field_population": {
        "ko": "인구",
        "en": "Population",
    },
    "field_diameter": {
        "ko": "지름",
        "en": "Diameter",
    },
    "field_distance": {
        "ko": "상대 거리",
        "en": "Relative distance",
    },
    "field_climate": {
        "ko": "기후",
        "en": "Climate",
    },
    "field_terrain": {
        "ko": "지형",
        "en": "Terrain",
    },
    "field_gravity": {
        "ko": "중력",
        "en": "Gravity",
    },
    "loading": {
        "ko": "✦ 행성을 불러오는 중",
        "en": "✦ Loading planets",
    },
    "showing_count": {
        "ko": "{total}개 중 {shown}개 표시",
        "en": "Showing {shown} of {total}",
    },
    "no_results": {
        "ko": "검색 결과가 없어요.",
        "en": "No planets found.",
    },
    "error_fetch": {
        "ko": "행성 정보를 불러오지 못했어요. 잠시 후 다시 시도해 주세요. ({error})",
        "en": "Could not load planets. Please try again shortly. ({error})",
    },
    "auto_load_exhausted": {
        "ko": "자동 불러오기는 최대 {limit}회까지예요. 버튼을 눌러 계속 보세요.",
        "en": "Automatic loading stops after {limit} pages. Use the button to continue.",
    },
    "chart_title": {
        "ko": "궤도 (케플러 제3법칙 상대 거리)",
        "en": "Orbits (relative distance, Kepler's third law)",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
