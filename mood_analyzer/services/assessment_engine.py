"""
Mental Health Assessment Engine
===============================

Combines the current mood selections, optional free-text reflections and an
optional TrendAnalysis into one MentalHealthAssessment:

1. Overall score from the taxonomy values of the selected moods
2. Crisis keyword scan of the reflections
3. Risk / urgency classification
4. Concerns, strengths and recommendations
5. Support resource selection from a fixed catalog

The engine holds no state and performs no I/O; identical inputs always
produce identical output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple

from mood_analyzer.services.trend_analysis import (
    RiskLevel,
    TrendAnalysis,
    TrendDirection,
    round_score,
)
from mood_analyzer.utils.crisis_detector import (
    ASSESSMENT_CRISIS_KEYWORDS,
    combine_reflections,
    contains_any,
)
from mood_analyzer.utils.emotion_mapping import mood_to_value

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

class UrgencyLevel(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    IMMEDIATE = "immediate"


class ResourceType(str, Enum):
    CRISIS = "crisis"
    THERAPY = "therapy"
    SUPPORT_GROUP = "support_group"
    SELF_HELP = "self_help"


@dataclass(frozen=True, slots=True)
class SupportResource:
    type: ResourceType
    name: str
    description: str
    contact: str
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
            "contact": self.contact,
            "url": self.url,
        }


@dataclass(slots=True)
class MentalHealthAssessment:
    """Final output of one assessment run."""
    overall_score: float
    risk_level: RiskLevel
    urgency_level: UrgencyLevel
    primary_concerns: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    requires_professional_help: bool = False
    support_resources: List[SupportResource] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "overall_score": self.overall_score,
            "risk_level": self.risk_level.value,
            "urgency_level": self.urgency_level.value,
            "primary_concerns": list(self.primary_concerns),
            "strengths": list(self.strengths),
            "recommendations": list(self.recommendations),
            "requires_professional_help": self.requires_professional_help,
            "support_resources": [r.to_dict() for r in self.support_resources],
        }


class InvalidAssessmentInput(ValueError):
    """Raised when an assessment is requested without any mood observation."""


# =============================================================================
# CATALOGS
# =============================================================================

SUPPORT_RESOURCES: Tuple[SupportResource, ...] = (
    SupportResource(
        type=ResourceType.CRISIS,
        name="National Suicide Prevention Lifeline",
        description="24/7 crisis support and suicide prevention",
        contact="988",
        url="https://suicidepreventionlifeline.org",
    ),
    SupportResource(
        type=ResourceType.CRISIS,
        name="Crisis Text Line",
        description="Text-based crisis support",
        contact="Text HOME to 741741",
    ),
    SupportResource(
        type=ResourceType.THERAPY,
        name="Psychology Today",
        description="Find licensed therapists in your area",
        contact="Online directory",
        url="https://www.psychologytoday.com",
    ),
    SupportResource(
        type=ResourceType.THERAPY,
        name="SAMHSA National Helpline",
        description="Treatment referral and information service",
        contact="1-800-662-4357",
        url="https://www.samhsa.gov/find-help/national-helpline",
    ),
    SupportResource(
        type=ResourceType.SUPPORT_GROUP,
        name="NAMI Support Groups",
        description="Peer support groups for mental health",
        contact="Local chapters available",
        url="https://www.nami.org/Support-Education/Support-Groups",
    ),
    SupportResource(
        type=ResourceType.SELF_HELP,
        name="MindTools Stress Management",
        description="Self-help resources for stress and anxiety",
        contact="Online resources",
        url="https://www.mindtools.com/stress-management",
    ),
)

CONCERN_ANXIETY = "Anxiety and worry patterns"
CONCERN_DEPRESSION = "Depressive symptoms"
CONCERN_ANGER = "Anger management challenges"
CONCERN_FATIGUE = "Fatigue and low energy"
CONCERN_SLEEP = "Sleep disturbances"
CONCERN_WORK = "Work-related stress"
CONCERN_RELATIONSHIP = "Relationship difficulties"
CONCERN_DECLINING = "Declining emotional well-being trend"
CONCERN_INSTABILITY = "Recent emotional instability"
CONCERN_DEFAULT = "General emotional wellness monitoring"

STRENGTH_JOY = "Capacity for joy and happiness"
STRENGTH_PEACE = "Ability to find peace and contentment"
STRENGTH_GRATITUDE = "Gratitude and appreciation"
STRENGTH_SUPPORT = "Strong support network"
STRENGTH_COPING = "Healthy coping strategies"
STRENGTH_GROWTH = "Positive emotional growth trajectory"
STRENGTH_REGULATION = "Stable emotional regulation"
STRENGTH_DEFAULT = "Willingness to self-reflect and seek understanding"

# (mood ids, concern) pairs, checked in order
MOOD_CONCERNS: List[Tuple[Tuple[str, ...], str]] = [
    (("anxious",), CONCERN_ANXIETY),
    (("sad", "devastated"), CONCERN_DEPRESSION),
    (("angry",), CONCERN_ANGER),
    (("tired",), CONCERN_FATIGUE),
]
TEXT_CONCERNS: List[Tuple[Tuple[str, ...], str]] = [
    (("sleep", "insomnia"), CONCERN_SLEEP),
    (("work", "job", "stress"), CONCERN_WORK),
    (("relationship", "family"), CONCERN_RELATIONSHIP),
]
MOOD_STRENGTHS: List[Tuple[Tuple[str, ...], str]] = [
    (("joyful", "ecstatic"), STRENGTH_JOY),
    (("content", "calm"), STRENGTH_PEACE),
]
TEXT_STRENGTHS: List[Tuple[Tuple[str, ...], str]] = [
    (("grateful", "thankful"), STRENGTH_GRATITUDE),
    (("support", "friend", "family"), STRENGTH_SUPPORT),
    (("exercise", "meditation", "hobby"), STRENGTH_COPING),
]

RECOMMENDATIONS_HIGH_RISK = [
    "Seek immediate professional mental health support",
    "Consider contacting a crisis helpline for immediate assistance",
    "Reach out to trusted friends, family, or support network",
    "Avoid making major life decisions while in distress",
]
RECOMMENDATIONS_MODERATE_RISK = [
    "Schedule an appointment with a mental health professional",
    "Consider therapy or counseling to develop coping strategies",
    "Practice daily stress management techniques",
]
CONCERN_RECOMMENDATIONS: List[Tuple[str, List[str]]] = [
    (CONCERN_ANXIETY, [
        "Practice deep breathing exercises and mindfulness meditation",
        "Limit caffeine intake and try progressive muscle relaxation",
    ]),
    (CONCERN_DEPRESSION, [
        "Maintain regular sleep schedule and engage in physical activity",
        "Connect with supportive friends and family members",
    ]),
    (CONCERN_SLEEP, [
        "Establish a consistent bedtime routine and sleep hygiene",
        "Limit screen time before bed and create a calm sleep environment",
    ]),
]
RECOMMENDATIONS_LOW_RISK = [
    "Continue current positive mental health practices",
    "Maintain regular self-care routines and social connections",
    "Consider keeping a mood journal for ongoing self-awareness",
]

# Support groups are offered when a concern mentions one of these
SUPPORT_GROUP_TERMS = ("relationship", "support")

HIGH_RISK_SCORE = 1.5
MEDIUM_URGENCY_SCORE = 2.5
LOW_URGENCY_SCORE = 3.5


# =============================================================================
# ENGINE
# =============================================================================

class AssessmentEngine:

    @classmethod
    def assess(
        cls,
        current_moods: Mapping[str, str],
        text_feedback: Optional[Mapping[str, str]] = None,
        trend: Optional[TrendAnalysis] = None,
    ) -> MentalHealthAssessment:
        """
        Build a comprehensive assessment.

        Args:
            current_moods: period -> emotion id; must not be empty
            text_feedback: period -> free-text reflection
            trend: historical analysis, None when history is unavailable

        Raises:
            InvalidAssessmentInput: current_moods is empty
        """
        if not current_moods:
            raise InvalidAssessmentInput("invalid input: no mood observations")

        mood_ids = list(current_moods.values())
        values = [mood_to_value(mood_id) for mood_id in mood_ids]
        overall_score = sum(values) / len(values)

        all_text = combine_reflections(text_feedback)
        crisis = cls.has_crisis_indicators(all_text)

        risk_level, urgency_level = cls.classify_risk(overall_score, crisis, trend)
        concerns = cls.identify_primary_concerns(mood_ids, all_text, trend)
        strengths = cls.identify_strengths(mood_ids, all_text, trend)
        recommendations = cls.generate_recommendations(risk_level, concerns)

        requires_professional_help = (
            risk_level == RiskLevel.HIGH
            or urgency_level in (UrgencyLevel.IMMEDIATE, UrgencyLevel.HIGH)
            or (trend is not None and trend.overall_trend == TrendDirection.CONCERNING)
        )
        resources = cls.select_support_resources(risk_level, urgency_level, concerns)

        logger.debug(
            "assessment: moods=%d score=%.2f crisis=%s risk=%s urgency=%s trend=%s",
            len(mood_ids), overall_score, crisis, risk_level.value, urgency_level.value,
            trend.overall_trend.value if trend is not None else None,
        )
        return MentalHealthAssessment(
            overall_score=round_score(overall_score),
            risk_level=risk_level,
            urgency_level=urgency_level,
            primary_concerns=concerns,
            strengths=strengths,
            recommendations=recommendations,
            requires_professional_help=requires_professional_help,
            support_resources=resources,
        )

    @staticmethod
    def has_crisis_indicators(all_text: str) -> bool:
        return contains_any(all_text, ASSESSMENT_CRISIS_KEYWORDS)

    @staticmethod
    def classify_risk(
        overall_score: float,
        crisis: bool,
        trend: Optional[TrendAnalysis],
    ) -> Tuple[RiskLevel, UrgencyLevel]:
        trend_risk = trend.risk_level if trend is not None else None

        if crisis or overall_score <= HIGH_RISK_SCORE:
            return RiskLevel.HIGH, UrgencyLevel.IMMEDIATE
        if overall_score <= MEDIUM_URGENCY_SCORE or trend_risk == RiskLevel.HIGH:
            return RiskLevel.MODERATE, UrgencyLevel.MEDIUM
        if overall_score <= LOW_URGENCY_SCORE or trend_risk == RiskLevel.MODERATE:
            return RiskLevel.MODERATE, UrgencyLevel.LOW
        return RiskLevel.LOW, UrgencyLevel.NONE

    @staticmethod
    def identify_primary_concerns(
        mood_ids: List[str],
        all_text: str,
        trend: Optional[TrendAnalysis],
    ) -> List[str]:
        concerns = [c for ids, c in MOOD_CONCERNS if any(m in mood_ids for m in ids)]
        concerns += [c for words, c in TEXT_CONCERNS if contains_any(all_text, words)]

        if trend is not None:
            if trend.overall_trend == TrendDirection.DECLINING:
                concerns.append(CONCERN_DECLINING)
            if trend.short_term.risk_factors:
                concerns.append(CONCERN_INSTABILITY)

        return concerns or [CONCERN_DEFAULT]

    @staticmethod
    def identify_strengths(
        mood_ids: List[str],
        all_text: str,
        trend: Optional[TrendAnalysis],
    ) -> List[str]:
        strengths = [s for ids, s in MOOD_STRENGTHS if any(m in mood_ids for m in ids)]
        strengths += [s for words, s in TEXT_STRENGTHS if contains_any(all_text, words)]

        if trend is not None:
            if trend.overall_trend == TrendDirection.IMPROVING:
                strengths.append(STRENGTH_GROWTH)
            if trend.risk_level == RiskLevel.LOW:
                strengths.append(STRENGTH_REGULATION)

        return strengths or [STRENGTH_DEFAULT]

    @staticmethod
    def generate_recommendations(risk_level: RiskLevel, concerns: List[str]) -> List[str]:
        recommendations: List[str] = []

        if risk_level == RiskLevel.HIGH:
            recommendations.extend(RECOMMENDATIONS_HIGH_RISK)
        elif risk_level == RiskLevel.MODERATE:
            recommendations.extend(RECOMMENDATIONS_MODERATE_RISK)

        for concern, block in CONCERN_RECOMMENDATIONS:
            if concern in concerns:
                recommendations.extend(block)

        if risk_level == RiskLevel.LOW:
            recommendations.extend(RECOMMENDATIONS_LOW_RISK)

        return recommendations

    @staticmethod
    def select_support_resources(
        risk_level: RiskLevel,
        urgency_level: UrgencyLevel,
        concerns: List[str],
    ) -> List[SupportResource]:
        def of_type(resource_type: ResourceType) -> List[SupportResource]:
            return [r for r in SUPPORT_RESOURCES if r.type == resource_type]

        resources: List[SupportResource] = []
        if risk_level == RiskLevel.HIGH or urgency_level == UrgencyLevel.IMMEDIATE:
            resources.extend(of_type(ResourceType.CRISIS))
        if risk_level in (RiskLevel.MODERATE, RiskLevel.HIGH):
            resources.extend(of_type(ResourceType.THERAPY))
        # Case-insensitive on purpose: concern strings are capitalized
        if any(term in c.lower() for c in concerns for term in SUPPORT_GROUP_TERMS):
            resources.extend(of_type(ResourceType.SUPPORT_GROUP))
        resources.extend(of_type(ResourceType.SELF_HELP))
        return resources
