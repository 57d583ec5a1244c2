from deckinsight.analysis.aggregator import build_frequency_map, most_common, top_n
from deckinsight.analysis.legality import remove_duplicates, validate_deck_list, validate_parsed_deck
from deckinsight.analysis.meta_trends import analyze_format, compare_deck_to_meta, identify_trends
from deckinsight.analysis.profile_insights import analyze_goldfish_profile, analyze_moxfield_profile
from deckinsight.analysis.recommendations import RecommendationEngine

__all__ = [
    "RecommendationEngine",
    "analyze_format",
    "analyze_goldfish_profile",
    "analyze_moxfield_profile",
    "build_frequency_map",
    "compare_deck_to_meta",
    "identify_trends",
    "most_common",
    "remove_duplicates",
    "top_n",
    "validate_deck_list",
    "validate_parsed_deck",
]
