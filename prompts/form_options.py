"""Writing form options: defaults, feature groups and dropdown choices.

The form is a flat mapping from option name to value. Every key the UI or
prompt assembly reads is declared in FORM_DEFAULTS; add new options there
first so that saved drafts created before the option existed still load.
"""

from typing import Dict, List

from core.errors import FormValidationError


# ------------------------------------------------------------------
# Dropdown choices
# ------------------------------------------------------------------

TOPICS: List[str] = [
    "Religion", "Politics", "Society", "Economics", "Science", "History",
    "Geography", "Literature", "Grammar", "Linguistics", "Law", "Medicine",
    "Other",
]

WRITING_TYPES: List[str] = [
    "Essay", "Report", "Graduation Project", "Master's Thesis",
    "Doctoral Dissertation", "Book",
]

LEVELS: List[str] = [
    "School", "Undergraduate", "Master's", "Doctorate", "Professor",
    "Post-doctorate", "Senior Researcher",
]

ROLES: List[str] = [
    "Author", "Critic", "Reviewer", "Journal Editor", "Evaluation Committee",
]

CITATION_STYLES: List[str] = [
    "Harvard", "APA 7th", "MLA 9th", "Chicago (Author-Date)",
    "Chicago (Notes-Bib)", "IEEE", "Vancouver", "Nature", "Science", "AMA",
]

REFERENCE_TYPES: List[str] = [
    "Primary Sources", "Secondary Sources", "Meta-Analysis",
    "Systematic Reviews", "Archival Data",
]


# ------------------------------------------------------------------
# Feature groups (boolean flags, one prompt fragment each)
# ------------------------------------------------------------------

FEATURE_GROUPS: Dict[str, List[str]] = {
    "vip": [
        "counterArgument", "theoreticalFramework", "globalPerspective",
        "historicalContext", "ethicalConsiderations", "futureImplications",
        "harvardClassicTone", "quantitativeAnalysis", "qualitativeAnalysis",
        "blindPeerReview",
    ],
    "methodology": [
        "mixedMethods", "longitudinalAnalysis", "crossSectional",
        "phenomenology", "groundedTheory",
    ],
    "logic": [
        "deductiveReasoning", "inductiveReasoning", "statisticalSignificance",
        "confidenceIntervals", "effectSize",
    ],
    "precision": [
        "triangulation", "biasDetection", "rhetoricalPrecision",
        "semanticDensity", "syntacticComplexity", "academicHedging",
        "signposting", "footnoteDensity", "glossaryCreation",
        "appendixStructuring",
    ],
    "linguistics": [
        "etymology", "philology", "sociolinguistics", "psycholinguistics",
        "discourseAnalysis",
    ],
    "philosophy": [
        "utilitarianism", "deontology", "existentialism", "stoicism",
        "postModernism",
    ],
    "dataScience": [
        "bigData", "predictiveModeling", "networkAnalysis",
        "geospatialAnalysis", "sentimentAnalysis",
    ],
    "criticalTheory": [
        "marxism", "feminism", "postColonialism", "structuralism",
        "deconstruction",
    ],
    "scientificRigor": [
        "reproducibilityCheck", "falsifiability", "controlVariables",
        "doubleBlindProtocol", "peerDebriefing",
    ],
    "economics": [
        "gameTheory", "behavioralEconomics", "macroEconomicTrends",
        "costBenefitAnalysis", "supplyChainAnalysis",
    ],
    "psychology": [
        "cognitiveBehavioral", "psychoanalysis", "humanisticPsychology",
        "socialPsychology", "neuropsychology",
    ],
    "legal": [
        "internationalLaw", "humanRights", "intellectualProperty",
        "bioethics", "corporateGovernance",
    ],
}

FEATURE_GROUP_LABELS: Dict[str, str] = {
    "vip": "VIP Features",
    "methodology": "Methodology",
    "logic": "Logic & Statistics",
    "precision": "Precision & Style",
    "linguistics": "Advanced Linguistics",
    "philosophy": "Philosophical Lenses",
    "dataScience": "Data Science",
    "criticalTheory": "Critical Theory",
    "scientificRigor": "Scientific Rigor",
    "economics": "Economic Models",
    "psychology": "Psychological Frameworks",
    "legal": "Legal & Ethical",
}

ALL_FEATURES: List[str] = [key for keys in FEATURE_GROUPS.values() for key in keys]

# Options that steer the peer-review pass rather than the writing prompt
REVIEW_ONLY_FEATURES = frozenset({"blindPeerReview"})


FORM_DEFAULTS: Dict[str, object] = {
    "title": "",
    "topic": "Science",
    "type": "Book",
    "level": "Professor",
    "pages": 10,
    "role": "Author",
    "superRole": False,  # writer, harsh critic and reviewer at once
    "dialectic": False,  # thesis / antithesis / synthesis
    "styleText": "",
    "compareText1": "",
    "compareText2": "",
    "compareBasis": "",
    "temperature": 0.7,
    "thinkingTokens": 4000,
    "writingTokens": 8000,
    "thesisCover": False,
    "citationStyle": "Harvard",
    "referenceType": "Primary Sources",
    "includeReferences": True,
    "dataFocus": False,
    "enableDataViz": False,
    "doiLinking": True,
    "crossRefCheck": False,
    "plagiarismCheck": False,
    "useCustomOutline": False,
    "customOutline": "",
    "customSources": "",
}
FORM_DEFAULTS.update({key: False for key in ALL_FEATURES})


def new_form(**overrides) -> Dict:
    """Build a form dict from the defaults

    Args:
        **overrides: Option values to set

    Returns:
        Fresh form dictionary

    Raises:
        FormValidationError: If an override names an unknown option
    """
    unknown = sorted(set(overrides) - set(FORM_DEFAULTS))
    if unknown:
        raise FormValidationError(f"Unknown form options: {', '.join(unknown)}")
    form = dict(FORM_DEFAULTS)
    form.update(overrides)
    return form


def merge_form(stored: Dict) -> Dict:
    """Merge a stored form over the defaults, dropping options that no longer exist"""
    form = dict(FORM_DEFAULTS)
    for key, value in (stored or {}).items():
        if key in FORM_DEFAULTS:
            form[key] = value
    return form


def validate_form(form: Dict) -> List[str]:
    """Check required fields and numeric ranges

    Returns:
        List of message keys for the problems found (empty when valid)
    """
    errors = []
    if not str(form.get("title") or "").strip():
        errors.append("title_required")
    for key in ("topic", "type", "level"):
        if not str(form.get(key) or "").strip():
            errors.append(f"{key}_required")

    try:
        if int(form.get("pages", 0)) < 1:
            errors.append("pages_invalid")
    except (TypeError, ValueError):
        errors.append("pages_invalid")

    try:
        temperature = float(form.get("temperature", 0.7))
        if not 0 <= temperature <= 1:
            errors.append("temperature_invalid")
    except (TypeError, ValueError):
        errors.append("temperature_invalid")

    return errors


def enabled_features(form: Dict, group: str = None) -> List[str]:
    keys = FEATURE_GROUPS[group] if group else ALL_FEATURES
    return [key for key in keys if form.get(key)]
