"""
Similarity Module - Project categories and related-project scoring
"""

WEB_DEVELOPMENT = 'Web Development'
FULL_STACK = 'Full Stack'
APP_DEVELOPMENT = 'App Development'
BLOCKCHAIN = 'Blockchain'
AI_ML = 'AI/ML'
IOT = 'IoT'
DEVELOPMENT = 'Development'

# Evaluated top to bottom, first match wins
CATEGORY_RULES = [
    ({'reactjs', 'nextjs'}, WEB_DEVELOPMENT),
    ({'mern'}, FULL_STACK),
    ({'flutter'}, APP_DEVELOPMENT),
    ({'solidity', 'web3.js', 'ethereum'}, BLOCKCHAIN),
    ({'python', 'tensorflow', 'openai api'}, AI_ML),
    ({'arduino', 'raspberry pi', 'mqtt'}, IOT),
]

SIMILARITY_BANDS = [
    (15, {
        'label': 'Highly Related',
        'description': 'Shares category and multiple technologies'
    }),
    (8, {
        'label': 'Related',
        'description': 'Shares category or key technologies'
    }),
    (3, {
        'label': 'Somewhat Related',
        'description': 'Shares some technologies or keywords'
    }),
]

DEFAULT_SIMILARITY = {
    'label': 'Suggested',
    'description': 'Recommended based on portfolio'
}

# Score weights
CATEGORY_MATCH = 10
TAG_OVERLAP = 3
EXACT_TAG_MATCH = 5
KEYWORD_OVERLAP = 2
TIMELINE_MATCH = 2
TEAM_MATCH = 1


def normalize_tags(tags):
    return [t.strip().lower() for t in tags or []]


def category_of(tags):
    """
    Classify a technology tag list

    Args:
        tags (list): Technology tags, compared case-insensitively

    Returns:
        str: One of the category constants, DEVELOPMENT when nothing matches
    """
    tech = set(normalize_tags(tags))
    for markers, category in CATEGORY_RULES:
        if tech & markers:
            return category
    return DEVELOPMENT


def _keywords(project):
    words = (project.get('title') or '').lower().split(' ')
    words += (project.get('description') or '').lower().split(' ')
    return [w for w in words if len(w) > 3]


def _overlaps(needle, haystack):
    return any(item in needle or needle in item for item in haystack)


def _same_text(a, b):
    return bool(a and b) and a.lower() == b.lower()


def score(reference, candidate):
    """
    Relatedness of candidate to reference

    Tag overlap is counted from the reference side, so score(a, b) and
    score(b, a) differ when the tag lists differ.

    Returns:
        int: Additive similarity score
    """
    reference_tech = normalize_tags(reference.get('techStack'))
    candidate_tech = normalize_tags(candidate.get('techStack'))

    total = 0

    if category_of(reference_tech) == category_of(candidate_tech):
        total += CATEGORY_MATCH

    # Fuzzy and exact matches both count for the same pair
    total += TAG_OVERLAP * sum(
        1 for tech in reference_tech if _overlaps(tech, candidate_tech))
    total += EXACT_TAG_MATCH * sum(
        1 for tech in reference_tech if tech in candidate_tech)

    candidate_keywords = _keywords(candidate)
    total += KEYWORD_OVERLAP * sum(
        1 for word in _keywords(reference) if _overlaps(word, candidate_keywords))

    if _same_text(reference.get('timeline'), candidate.get('timeline')):
        total += TIMELINE_MATCH

    if _same_text(reference.get('team'), candidate.get('team')):
        total += TEAM_MATCH

    return total


def related_projects(reference, catalog, limit=2):
    """
    Rank catalog entries by relatedness to reference

    Args:
        reference (dict): The project being viewed
        catalog (list): All projects, reference included or not
        limit (int): Maximum number of results

    Returns:
        list: Copies of up to `limit` projects with a 'score' key, best first.
        Ties keep catalog order. The reference itself is never included.
    """
    if limit <= 0:
        return []

    reference_id = reference.get('id')
    others = [p for p in catalog if p.get('id') != reference_id]

    scored = [dict(p, score=score(reference, p)) for p in others]
    scored.sort(key=lambda p: p['score'], reverse=True)
    selected = scored[:limit]

    # Backfill in catalog order if scoring produced too few
    if len(selected) < limit:
        chosen = {p.get('id') for p in selected}
        for project in others:
            if len(selected) >= limit:
                break
            if project.get('id') not in chosen:
                selected.append(dict(project))
                chosen.add(project.get('id'))

    return selected


def similarity_label(value):
    """Map a score to its display band"""
    for threshold, band in SIMILARITY_BANDS:
        if value >= threshold:
            return dict(band)
    return dict(DEFAULT_SIMILARITY)


__all__ = [
    'CATEGORY_RULES',
    'category_of',
    'score',
    'related_projects',
    'similarity_label'
]
