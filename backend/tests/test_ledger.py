from blindtest.services.blindtest.ledger import ScoreLedger


def test_add_points_creates_entry():
    ledger = ScoreLedger()
    assert ledger.add_points('alice', 2) == 2
    assert ledger.add_points('alice', 1) == 3
    assert ledger.get('alice') == 3


def test_scores_may_go_negative():
    ledger = ScoreLedger()
    ledger.add_points('bob', -1)
    ledger.add_points('bob', -1)
    assert ledger.get('bob') == -2


def test_unknown_player_scores_zero():
    ledger = ScoreLedger()
    assert ledger.get('nobody') == 0
    assert 'nobody' not in ledger


def test_ensure_registered_does_not_touch_existing_score():
    ledger = ScoreLedger({'alice': 4})
    assert ledger.ensure_registered('alice') is False
    assert ledger.ensure_registered('bob') is True
    assert ledger.snapshot() == {'alice': 4, 'bob': 0}


def test_nicknames_are_case_sensitive():
    ledger = ScoreLedger()
    ledger.add_points('Alice', 1)
    ledger.add_points('alice', 1)
    assert len(ledger) == 2
    assert sorted(ledger.entries()) == [('Alice', 1), ('alice', 1)]


def test_snapshot_is_a_copy():
    ledger = ScoreLedger({'alice': 1})
    snap = ledger.snapshot()
    snap['alice'] = 100
    assert ledger.get('alice') == 1
