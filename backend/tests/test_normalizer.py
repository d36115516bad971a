import pytest

from blindtest.services.blindtest.normalizer import normalize, normalize_answer, strip_qualifiers


SAMPLES = [
    'Beyoncé',
    '  AC/DC  ',
    'Sigur Rós — Hoppípolla',
    'İstanbul',
    'Straße',
    'Mötley Crüe & Friends!!',
    "rock'n'roll",
    'ＦＵＬＬＷＩＤＴＨ',
    'Get Lucky (feat. Pharrell Williams)',
    'Song feat.Bob',
    'Hey Jude - Remastered 2015',
    "(I Can't Get No) Satisfaction",
    '',
]


def test_normalize_folds_case_accents_and_punctuation():
    assert normalize('  Beyoncé  ') == 'beyonce'
    assert normalize('AC/DC') == 'ac dc'
    assert normalize("Don't Stop Me Now!") == 'dont stop me now'
    assert normalize('Sigur_Rós') == 'sigur ros'
    assert normalize('Sweet Child O’ Mine') == 'sweet child o mine'
    assert normalize('a   b\t\nc') == 'a b c'
    assert normalize('') == ''


def test_normalize_keeps_bracketed_words_of_propositions():
    assert normalize('get lucky (feat. pharrell)') == 'get lucky feat pharrell'


def test_normalize_answer_strips_release_metadata():
    assert normalize_answer('Get Lucky (feat. Pharrell Williams)') == 'get lucky'
    assert normalize_answer('Hey Jude - Remastered 2015') == 'hey jude'
    assert normalize_answer('Empire State of Mind [Live]') == 'empire state of mind'
    assert normalize_answer('Stay ft. Justin Bieber') == 'stay'
    assert normalize_answer('Old Town Road featuring Billy Ray Cyrus') == 'old town road'
    assert normalize_answer('Song feat.Bob') == 'song'


def test_normalize_answer_keeps_meaningful_dash_suffixes():
    assert normalize_answer('Lose Yourself - From 8 Mile') == 'lose yourself from 8 mile'
    assert normalize_answer('Up - Oliver Twist') == 'up oliver twist'


def test_normalize_answer_keeps_leading_parenthetical_titles():
    assert strip_qualifiers("(I Can't Get No) Satisfaction") == "(I Can't Get No) Satisfaction"
    assert normalize_answer("(I Can't Get No) Satisfaction") == 'i cant get no satisfaction'
    assert normalize_answer("(Don't Fear) The Reaper") == 'dont fear the reaper'
    assert normalize_answer('Intro (Reprise)') == 'intro reprise'


def test_normalize_answer_falls_back_when_everything_is_a_qualifier():
    assert strip_qualifiers('(Live)') == ''
    assert normalize_answer('(Live)') == 'live'


@pytest.mark.parametrize('raw', SAMPLES)
def test_normalize_is_idempotent(raw):
    once = normalize(raw)
    assert normalize(once) == once


@pytest.mark.parametrize('raw', SAMPLES)
def test_normalize_answer_is_idempotent(raw):
    once = normalize_answer(raw)
    assert normalize_answer(once) == once
