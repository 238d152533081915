"""Tests for project categorization, scoring and related-project ranking."""

from utils.similarity import (
    category_of,
    score,
    related_projects,
    similarity_label,
    WEB_DEVELOPMENT,
    FULL_STACK,
    APP_DEVELOPMENT,
    BLOCKCHAIN,
    AI_ML,
    IOT,
    DEVELOPMENT,
)


def test_category_rules_follow_priority_order():
    assert category_of(['ReactJS', 'MERN']) == WEB_DEVELOPMENT
    assert category_of(['ReactJS', 'Node.js']) == WEB_DEVELOPMENT
    assert category_of(['Solidity', 'Python']) == BLOCKCHAIN


def test_category_matching_is_case_insensitive():
    assert category_of(['mern', 'Stripe']) == FULL_STACK
    assert category_of(['FLUTTER']) == APP_DEVELOPMENT
    assert category_of(['TensorFlow']) == AI_ML
    assert category_of(['Raspberry Pi']) == IOT


def test_category_defaults_to_development():
    assert category_of(['Go', 'Rust']) == DEVELOPMENT
    assert category_of([]) == DEVELOPMENT
    assert category_of(None) == DEVELOPMENT


def test_score_counts_fuzzy_and_exact_tag_matches():
    a = {'techStack': ['React']}
    b = {'techStack': ['React', 'Redux']}
    # category 10 + fuzzy 3 + exact 5
    assert score(a, b) == 18


def test_score_is_asymmetric():
    a = {'techStack': ['ReactJS']}
    b = {'techStack': ['ReactJS', 'React']}
    assert score(a, b) == 18
    # 'react' is a substring of 'reactjs', so it adds a fuzzy match from b's side
    assert score(b, a) == 21


def test_score_timeline_and_team_match_case_insensitively():
    a = {'timeline': '2 Months', 'team': 'Solo'}
    b = {'timeline': '2 months', 'team': 'SOLO'}
    assert score(a, b) == 10 + 2 + 1


def test_score_keyword_overlap_ignores_short_words():
    a = {'title': 'Portfolio Website', 'description': 'a new app'}
    b = {'title': 'Website Builder', 'description': 'for all'}
    assert score(a, b) == 10 + 2


def test_related_projects_excludes_reference_and_respects_limit():
    catalog = [
        {'id': 'a', 'techStack': ['ReactJS']},
        {'id': 'b', 'techStack': ['Flutter']},
        {'id': 'c', 'techStack': ['ReactJS', 'NextJS']},
        {'id': 'd', 'techStack': ['Solidity']},
    ]
    related = related_projects(catalog[0], catalog, limit=2)

    assert [p['id'] for p in related] == ['c', 'b']
    assert all(p['id'] != 'a' for p in related)
    assert related[0]['score'] > related[1]['score']


def test_related_projects_ties_keep_catalog_order():
    catalog = [
        {'id': 'ref', 'techStack': ['Go']},
        {'id': 'x', 'techStack': ['Elixir']},
        {'id': 'y', 'techStack': ['Haskell']},
        {'id': 'z', 'techStack': ['OCaml']},
    ]
    related = related_projects(catalog[0], catalog, limit=3)
    assert [p['id'] for p in related] == ['x', 'y', 'z']


def test_related_projects_does_not_mutate_catalog():
    catalog = [{'id': 'a', 'techStack': ['ReactJS']}, {'id': 'b', 'techStack': ['ReactJS']}]
    related_projects(catalog[0], catalog, limit=1)
    assert 'score' not in catalog[1]


def test_related_projects_with_small_catalog_or_zero_limit():
    catalog = [{'id': 'a'}, {'id': 'b'}]
    assert [p['id'] for p in related_projects(catalog[0], catalog, limit=5)] == ['b']
    assert related_projects(catalog[0], catalog, limit=0) == []
    assert related_projects(catalog[0], [catalog[0]], limit=2) == []


def test_similarity_label_bands():
    assert similarity_label(21)['label'] == 'Highly Related'
    assert similarity_label(15)['label'] == 'Highly Related'
    assert similarity_label(14)['label'] == 'Related'
    assert similarity_label(8)['label'] == 'Related'
    assert similarity_label(7)['label'] == 'Somewhat Related'
    assert similarity_label(3)['label'] == 'Somewhat Related'
    assert similarity_label(2)['label'] == 'Suggested'
    assert similarity_label(0) == {
        'label': 'Suggested',
        'description': 'Recommended based on portfolio'
    }
