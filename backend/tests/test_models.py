import threading

import pytest

from poker.errors import ValidationFailure
from poker.models import UNREVEALED, Room


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def make_room(now=1000.0):
    clock = FakeClock(now)
    return Room('Story 1', now, clock=clock), clock


def test_first_view_is_hidden():
    room, _ = make_room()
    assert room.view('alice') == (UNREVEALED, True)
    # viewing again keeps the single sentinel entry
    assert room.view('alice') == (UNREVEALED, True)
    assert room.snapshot().estimates == {'alice': UNREVEALED}


def test_view_after_estimate_is_visible():
    room, _ = make_room()
    room.view('alice')
    room.set_estimate('alice', '8')
    assert room.view('alice') == ('8', False)


def test_explicit_question_mark_stays_hidden():
    room, _ = make_room()
    room.set_estimate('carol', '?')
    assert room.view('carol') == ('?', True)


def test_view_does_not_count_as_activity():
    room, clock = make_room(1000.0)
    clock.now = 5000.0
    room.view('alice')
    assert room.last_activity == 1000.0


def test_estimate_and_description_advance_activity():
    room, clock = make_room(1000.0)
    clock.now = 2000.0
    room.set_estimate('alice', '3')
    assert room.last_activity == 2000.0
    clock.now = 3000.0
    room.set_description('Story 2')
    assert room.last_activity == 3000.0


def test_activity_never_moves_backwards():
    room, clock = make_room(1000.0)
    clock.now = 500.0
    room.set_estimate('alice', '3')
    assert room.last_activity == 1000.0


def test_description_change_starts_new_round():
    room, _ = make_room()
    room.set_estimate('alice', '3')
    room.set_estimate('bob', '5')
    room.set_description('Story 2')
    snap = room.snapshot()
    assert snap.description == 'Story 2'
    assert snap.estimates == {}
    assert room.view('alice') == (UNREVEALED, True)


def test_same_description_still_clears():
    room, _ = make_room()
    room.set_estimate('alice', '3')
    room.set_description('Story 1')
    assert room.snapshot().estimates == {}


def test_empty_estimate_rejected():
    room, _ = make_room()
    with pytest.raises(ValidationFailure):
        room.set_estimate('alice', '')
    with pytest.raises(ValidationFailure):
        room.set_estimate('alice', None)
    assert room.snapshot().estimates == {}


def test_snapshot_is_a_copy():
    room, _ = make_room()
    room.set_estimate('alice', '3')
    snap = room.snapshot()
    snap.estimates['mallory'] = '100'
    assert room.snapshot().estimates == {'alice': '3'}


def test_concurrent_estimates_are_not_lost():
    room, _ = make_room()
    submissions = {'alice': '5', 'bob': '8', 'carol': '?'}
    for i in range(50):
        submissions[f'user{i}'] = str(i)
    barrier = threading.Barrier(len(submissions))

    def submit(name, value):
        barrier.wait()
        room.set_estimate(name, value)

    threads = [threading.Thread(target=submit, args=item) for item in submissions.items()]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert room.snapshot().estimates == submissions
