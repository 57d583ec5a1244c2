from deckinsight.models.card import CardEntry, ParsedDeck
from deckinsight.models.failure import (
    ApiResponse,
    FailureDetail,
    FailureKind,
    FetchError,
    FetchResult,
    HistoryImportError,
    KnownError,
    OutcomeType,
    ProfileAnalysisError,
)
from deckinsight.models.history import (
    ArchetypeSuggestion,
    BudgetPlaceholder,
    BudgetSubstitutionReport,
    Gap,
    HistoryAnalysis,
    HistoryEntry,
    RecommendationBundle,
    Staple,
)
from deckinsight.models.knowledge import KnowledgeEntry, KnowledgeSummary
from deckinsight.models.meta import MetaAnalysis, MetaComparison, MetaDeckRecord, Trends
from deckinsight.models.profile import (
    DeckCardList,
    DeckLink,
    GoldfishProfile,
    MoxfieldProfile,
    ProfileAnalysis,
    ProfileComparison,
    ScrapedDeck,
    UserPattern,
)
from deckinsight.models.ranking import FrequencyMap, RankedEntry
from deckinsight.models.validation import DuplicateCard, ValidationResult

__all__ = [
    "ApiResponse",
    "ArchetypeSuggestion",
    "BudgetPlaceholder",
    "BudgetSubstitutionReport",
    "CardEntry",
    "DeckCardList",
    "DeckLink",
    "DuplicateCard",
    "FailureDetail",
    "FailureKind",
    "FetchError",
    "FetchResult",
    "FrequencyMap",
    "Gap",
    "GoldfishProfile",
    "HistoryAnalysis",
    "HistoryEntry",
    "HistoryImportError",
    "KnowledgeEntry",
    "KnowledgeSummary",
    "KnownError",
    "MetaAnalysis",
    "MetaComparison",
    "MetaDeckRecord",
    "MoxfieldProfile",
    "OutcomeType",
    "ParsedDeck",
    "ProfileAnalysis",
    "ProfileComparison",
    "RankedEntry",
    "ScrapedDeck",
    "Staple",
    "Trends",
    "UserPattern",
    "ValidationResult",
]
