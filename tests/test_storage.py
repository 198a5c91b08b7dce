import json

from coin_chase.storage import HighScoreStore, PlayQuota

DAY = 24 * 60 * 60


class WallClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_high_score_defaults_to_zero(tmp_path):
    assert HighScoreStore(tmp_path / "hs.json").load() == 0.0


def test_high_score_round_trips(tmp_path):
    store = HighScoreStore(tmp_path / "nested" / "hs.json")
    store.save(12.34)
    assert store.load() == 12.3


def test_corrupt_high_score_is_ignored(tmp_path):
    path = tmp_path / "hs.json"
    path.write_text("{not json")
    assert HighScoreStore(path).load() == 0.0
    path.write_text(json.dumps({"highscore": "lots"}))
    assert HighScoreStore(path).load() == 0.0


def test_fresh_quota_starts_a_new_day(tmp_path):
    clock = WallClock()
    path = tmp_path / "plays.json"
    quota = PlayQuota(path, max_plays=3, clock=clock)
    assert quota.plays_left == 3
    assert json.loads(path.read_text()) == {"last_play": clock.now, "plays": 0}


def test_plays_are_counted_and_persisted(tmp_path):
    clock = WallClock()
    path = tmp_path / "plays.json"
    quota = PlayQuota(path, max_plays=2, clock=clock)
    assert quota.record_play()
    assert quota.record_play()
    assert not quota.can_start()
    assert not quota.record_play()

    clock.now += 60
    again = PlayQuota(path, max_plays=2, clock=clock)
    assert again.plays_left == 0


def test_quota_resets_after_the_window(tmp_path):
    clock = WallClock()
    path = tmp_path / "plays.json"
    quota = PlayQuota(path, max_plays=2, window=DAY, clock=clock)
    quota.record_play()
    quota.record_play()

    clock.now += DAY
    assert quota.refresh() == 0
    clock.now += 1
    assert quota.refresh() == 2
    assert quota.last_play == clock.now


def test_can_start_notices_a_new_day(tmp_path):
    clock = WallClock()
    quota = PlayQuota(tmp_path / "plays.json", max_plays=1, window=DAY, clock=clock)
    assert quota.record_play()
    assert not quota.can_start()

    clock.now += DAY + 1
    assert quota.can_start()
    assert quota.record_play()


def test_corrupt_quota_file_starts_fresh(tmp_path):
    path = tmp_path / "plays.json"
    path.write_text(json.dumps(["not", "a", "dict"]))
    quota = PlayQuota(path, max_plays=5, clock=WallClock())
    assert quota.plays_left == 5
