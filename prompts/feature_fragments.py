"""Prompt fragments for the boolean writing options.

Each enabled option contributes exactly one fixed instruction; disabled
options, and options that only steer the peer-review pass, contribute
nothing. Groups are rendered in FEATURE_GROUPS order and keys in group
order, so the assembled block is a pure function of the form.
"""

from typing import Dict

from prompts.form_options import FEATURE_GROUPS, REVIEW_ONLY_FEATURES


FEATURE_FRAGMENTS: Dict[str, str] = {
    # VIP
    "counterArgument": (
        "For every major argument, present a strong counter-argument and then "
        "refute it with rigorous logic."
    ),
    "theoreticalFramework": (
        "Anchor the discussion in a recognised, in-depth theoretical framework "
        "from the field."
    ),
    "globalPerspective": (
        "Analyse the problem from a global, international perspective rather "
        "than a purely local one."
    ),
    "historicalContext": (
        "Explain the historical background of the subject in depth to show the "
        "roots of the problem."
    ),
    "ethicalConsiderations": (
        "Examine the ethical considerations connected to the subject in detail."
    ),
    "futureImplications": (
        "Present future implications and forecasts grounded in current data."
    ),
    "harvardClassicTone": (
        "Adopt a classic, weighty Harvard tone with sophisticated, philosophical "
        "vocabulary and long academic sentences."
    ),
    "quantitativeAnalysis": (
        "Conduct the analysis quantitatively, relying on numerical data and "
        "mathematical statistics."
    ),
    "qualitativeAnalysis": (
        "Conduct the analysis qualitatively, probing meanings, causes and "
        "motivations."
    ),
    # Methodology
    "mixedMethods": "Use a mixed-methods approach to analyse the data.",
    "longitudinalAnalysis": "Perform a longitudinal analysis to show changes over time.",
    "crossSectional": "Perform a cross-sectional comparison between different groups.",
    "phenomenology": "Use a phenomenological approach to understand lived experience.",
    "groundedTheory": "Use grounded theory to derive theory from the data.",
    # Logic & statistics
    "deductiveReasoning": "Use deductive reasoning, moving from the general to the specific.",
    "inductiveReasoning": "Use inductive reasoning, moving from the specific to the general.",
    "statisticalSignificance": "Emphasise statistical significance and report p-values.",
    "confidenceIntervals": "State confidence intervals for every estimate.",
    "effectSize": "Report effect sizes to show the strength of relationships.",
    # Precision & style
    "triangulation": "Use triangulation to corroborate data from several sources.",
    "biasDetection": "Identify potential biases and explain how they are mitigated.",
    "rhetoricalPrecision": "Choose words with rhetorical precision.",
    "semanticDensity": "Keep semantic density high: much information in few words.",
    "syntacticComplexity": "Use syntactic complexity to express intricate relationships.",
    "academicHedging": "Use academic hedging to avoid unwarranted generalisations.",
    "signposting": "Use signposting to guide the reader through the text.",
    "footnoteDensity": "Use frequent footnotes for supplementary explanation.",
    "glossaryCreation": "Prepare a glossary of the technical terms used.",
    "appendixStructuring": "Structure supplementary data into clearly labelled appendices.",
    # Linguistics
    "etymology": "Use etymology to explain the origin of key terms.",
    "philology": "Apply philology when reading historical texts.",
    "sociolinguistics": "Include a sociolinguistic analysis.",
    "psycholinguistics": "Include a psycholinguistic analysis.",
    "discourseAnalysis": "Use discourse analysis to interpret the texts discussed.",
    # Philosophy
    "utilitarianism": "Apply a utilitarian philosophical lens.",
    "deontology": "Apply a deontological philosophical lens.",
    "existentialism": "Apply an existentialist philosophical lens.",
    "stoicism": "Apply a Stoic philosophical lens.",
    "postModernism": "Apply a postmodernist philosophical lens.",
    # Data science
    "bigData": "Discuss the subject in light of big-data analysis.",
    "predictiveModeling": "Use predictive modelling to project outcomes.",
    "networkAnalysis": "Use network analysis to map relationships between actors.",
    "geospatialAnalysis": "Include a geospatial analysis where relevant.",
    "sentimentAnalysis": "Include a sentiment analysis of relevant discourse.",
    # Critical theory
    "marxism": "Read the subject through a Marxist critical lens.",
    "feminism": "Read the subject through a feminist critical lens.",
    "postColonialism": "Read the subject through a postcolonial critical lens.",
    "structuralism": "Read the subject through a structuralist critical lens.",
    "deconstruction": "Apply deconstruction to the central concepts.",
    # Scientific rigor
    "reproducibilityCheck": "State how each finding could be reproduced.",
    "falsifiability": "Formulate claims so that they are falsifiable.",
    "controlVariables": "Identify the control variables explicitly.",
    "doubleBlindProtocol": "Describe any empirical work under a double-blind protocol.",
    "peerDebriefing": "Mention peer debriefing as a credibility check.",
    # Economics
    "gameTheory": "Use game theory to analyse strategic interactions.",
    "behavioralEconomics": "Apply insights from behavioural economics.",
    "macroEconomicTrends": "Relate the subject to macroeconomic trends.",
    "costBenefitAnalysis": "Include a cost-benefit analysis.",
    "supplyChainAnalysis": "Include a supply-chain analysis where relevant.",
    # Psychology
    "cognitiveBehavioral": "Apply a cognitive-behavioural framework.",
    "psychoanalysis": "Apply a psychoanalytic framework.",
    "humanisticPsychology": "Apply a humanistic psychology framework.",
    "socialPsychology": "Apply a social psychology framework.",
    "neuropsychology": "Apply a neuropsychological framework.",
    # Legal & ethical
    "internationalLaw": "Consider the relevant international law.",
    "humanRights": "Consider the human-rights dimension.",
    "intellectualProperty": "Consider intellectual-property questions.",
    "bioethics": "Consider the bioethical dimension.",
    "corporateGovernance": "Consider corporate-governance implications.",
}


def render_feature_instructions(form: Dict) -> str:
    """Render the enabled feature flags as a bullet list

    Args:
        form: Writing form values

    Returns:
        Newline-joined "- ..." lines, empty string when no flag is set
    """
    lines = []
    for keys in FEATURE_GROUPS.values():
        for key in keys:
            if form.get(key) and key not in REVIEW_ONLY_FEATURES:
                lines.append(f"- {FEATURE_FRAGMENTS[key]}")
    return "\n".join(lines)
