from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import lru_cache

import spacy
from spacy.language import Language
from spacy.tokens import Doc, Span

from talentmatch.config import settings

DEFAULT_SKILL_CATALOG: tuple[str, ...] = (
    "JavaScript", "Python", "Java", "React", "Node.js", "Angular", "Vue.js",
    "TypeScript", "PHP", "Ruby", "Go", "Rust", "C++", "C#", "Swift",
    "Kotlin", "Dart", "Flutter", "React Native", "MongoDB", "PostgreSQL",
    "MySQL", "Redis", "AWS", "Azure", "GCP", "Docker", "Kubernetes",
    "Git", "GitHub", "CI/CD", "REST API", "GraphQL", "Microservices",
    "Machine Learning", "AI", "Data Science", "Blockchain", "Web3",
    "Solidity", "Smart Contracts", "Ethereum", "Bitcoin", "NFT",
    "UI/UX", "Figma", "Adobe XD", "Sketch", "HTML", "CSS", "SASS",
    "Bootstrap", "Tailwind CSS", "WordPress", "Shopify", "SEO", "SEM",
    "Google Analytics", "Tableau", "Power BI", "Excel", "SQL",
    "Agile", "Scrum", "Kanban", "Jira", "Confluence", "Slack",
    "Zoom", "Microsoft Teams", "Salesforce", "HubSpot", "Zapier",
)

TECHNICAL_TERMS = ("API", "database", "framework", "library", "algorithm", "architecture")

# Runs of capitalised or tech-looking tokens ("Node.js", "CI/CD", "C++", "Power BI").
_PHRASE_RE = re.compile(r"[A-Z][\w.+#/-]*(?:\s+[A-Z][\w.+#/-]*)*|[a-z]+\.js\b")
_SENTENCE_START_STOPWORDS = {"We", "You", "Our", "The", "A", "An", "This", "It", "If", "And", "Or", "I"}

_NOUN_TAGS = frozenset({"NOUN", "PROPN"})
_VERB_TAGS = frozenset({"VERB", "AUX"})
_REQUIREMENT_TRIGGERS = frozenset({"must", "should", "require", "need"})
_BENEFIT_TRIGGERS = frozenset({"benefits", "perks", "offer", "provide"})


@dataclass(frozen=True)
class SkillExtraction:
    skills: list[str] = field(default_factory=list)
    confidence: float = 0.3


@dataclass(frozen=True)
class JobDescriptionAnalysis:
    key_phrases: list[str] = field(default_factory=list)
    requirements: list[str] = field(default_factory=list)
    benefits: list[str] = field(default_factory=list)
    complexity_score: int = 0
    word_count: int = 0


def active_catalog(catalog: Sequence[str] | None = None) -> list[str]:
    if catalog:
        return list(catalog)
    if settings.skill_catalog:
        return list(settings.skill_catalog)
    return list(DEFAULT_SKILL_CATALOG)


def extract_skills(
    text: str,
    catalog: Sequence[str] | None = None,
    *,
    max_skills: int | None = None,
) -> SkillExtraction:
    skills = active_catalog(catalog)
    limit = max_skills if max_skills is not None else settings.max_skills_extracted
    lowered = (text or "").lower()

    phrases = [
        phrase.lower()
        for phrase in _candidate_phrases(text or "")
        if len(phrase) >= 2 and phrase not in _SENTENCE_START_STOPWORDS
    ]
    from_phrases = [
        skill
        for skill in skills
        if any(skill.lower() in phrase or phrase in skill.lower() for phrase in phrases)
    ]
    from_text = [skill for skill in skills if skill.lower() in lowered]

    found = _dedupe(from_phrases + from_text)[:limit]
    return SkillExtraction(skills=found, confidence=0.8 if found else 0.3)


def suggest_skills(
    partial: str,
    catalog: Sequence[str] | None = None,
    *,
    limit: int | None = None,
) -> list[str]:
    needle = (partial or "").lower()
    max_items = limit if limit is not None else settings.max_skill_suggestions
    return [skill for skill in active_catalog(catalog) if needle in skill.lower()][:max_items]


def analyze_job_description(description: str) -> JobDescriptionAnalysis:
    text = description or ""
    lowered = text.lower()
    doc = _nlp()(text)

    key_phrases = _dedupe(span.text for span in _tag_runs(doc, _NOUN_TAGS))
    requirements = _trigger_runs(doc, _REQUIREMENT_TRIGGERS, _VERB_TAGS)
    benefits = _trigger_runs(doc, _BENEFIT_TRIGGERS, _NOUN_TAGS)

    term_hits = sum(1 for term in TECHNICAL_TERMS if term.lower() in lowered)
    complexity = min(100.0, term_hits / 5 * 100)

    return JobDescriptionAnalysis(
        key_phrases=key_phrases[:10],
        requirements=requirements[:5],
        benefits=benefits[:5],
        complexity_score=int(complexity + 0.5),
        word_count=len(text.split(" ")),
    )


@lru_cache(maxsize=1)
def _nlp() -> Language:
    return spacy.load(settings.spacy_model)


def _tag_runs(doc: Doc, tags: frozenset[str]) -> list[Span]:
    """Maximal runs of consecutive tokens whose POS tag is in ``tags``."""
    runs: list[Span] = []
    start: int | None = None
    for token in doc:
        if token.pos_ in tags:
            if start is None:
                start = token.i
            continue
        if start is not None:
            runs.append(doc[start : token.i])
            start = None
    if start is not None:
        runs.append(doc[start : len(doc)])
    return runs


def _trigger_runs(doc: Doc, triggers: frozenset[str], tags: frozenset[str]) -> list[str]:
    """A trigger word directly followed by one or more tokens tagged with ``tags``."""
    out: list[str] = []
    for token in doc:
        if token.lower_ not in triggers:
            continue
        end = token.i + 1
        while end < len(doc) and doc[end].pos_ in tags:
            end += 1
        if end > token.i + 1:
            out.append(doc[token.i : end].text)
    return out


def _candidate_phrases(text: str) -> list[str]:
    return [match.group(0).strip(" .,-") for match in _PHRASE_RE.finditer(text) if match.group(0).strip(" .,-")]


def _dedupe(values) -> list[str]:
    out: list[str] = []
    seen: set[str] = set()
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out
