from matchscore.explanation import generate_match_reasons, generate_match_tags

from conftest import flat_traits, make_context


def _labels(context):
    return [tag.label for tag in generate_match_tags(context)]


def _types(reasons):
    return [reason.detail.type for reason in reasons]


class TestMatchTags:

    def test_cold_start_gets_baselines(self, empty_context):
        assert _labels(empty_context) == ["style_similar", "activity_pattern", "high_reliability"]

    def test_signals_then_padding(self):
        context = make_context(viewer={"games": [570]}, target={"games": [570], "is_online": True})
        assert _labels(context) == ["same_game", "online_now", "style_similar"]

    def test_play_time_ratio(self):
        close = make_context(viewer={"play_time": 600}, target={"play_time": 1000})
        far = make_context(viewer={"play_time": 100}, target={"play_time": 1000})
        assert "play_time_match" in _labels(close)
        assert _labels(far) == ["style_similar", "activity_pattern", "high_reliability"]

    def test_dissimilar_traits_get_no_style_tag_before_padding(self):
        slots = [("weekday", "evening")]
        context = make_context(
            viewer={"traits": flat_traits(cooperation=100, social=0, exploration=0), "games": [1], "schedule": slots},
            target={"traits": flat_traits(cooperation=0, social=100, exploration=0), "games": [1], "schedule": slots,
                    "is_online": True},
        )
        assert _labels(context) == ["same_game", "schedule_match", "online_now"]

    def test_capped_at_five(self):
        slots = [("weekday", "evening")]
        context = make_context(
            viewer={"games": [1], "play_time": 900, "traits": flat_traits(), "schedule": slots, "party_count": 10},
            target={"games": [1], "play_time": 1000, "traits": flat_traits(), "schedule": slots,
                    "is_online": True, "reliability": 90, "party_count": 8},
        )
        labels = _labels(context)
        assert len(labels) == 5
        assert labels == ["same_game", "play_time_match", "style_similar", "schedule_match", "online_now"]


class TestMatchReasons:

    def test_cold_start_baselines(self, empty_context):
        reasons = generate_match_reasons(empty_context)
        assert _types(reasons) == ["STYLE_SIMILARITY", "ACTIVITY_PATTERN", "RELIABILITY"]
        assert all(r.is_baseline for r in reasons)
        assert reasons[0].detail.similarity_score == 50

    def test_common_games(self):
        context = make_context(viewer={"games": [730, 570, 440]}, target={"games": [440, 570, 730]})
        reason = generate_match_reasons(context)[0]
        assert reason.priority == 'HIGH'
        assert reason.detail.game_count == 3
        assert reason.detail.top_games == ["Game 730", "Game 570"]
        assert reason.is_baseline is False

    def test_style_similarity_uses_top_trait(self):
        context = make_context(
            viewer={"traits": flat_traits(strategy=90)},
            target={"traits": flat_traits(strategy=20)},
        )
        style = generate_match_reasons(context)[0]
        assert style.detail.type == "STYLE_SIMILARITY"
        assert style.detail.top_trait == "cooperation"
        assert not style.is_baseline

    def test_activity_pattern_lists_common_slots(self):
        context = make_context(
            viewer={"schedule": [("weekday", "evening"), ("weekend", "night")]},
            target={"schedule": [("weekend", "night")]},
        )
        pattern = generate_match_reasons(context)[0]
        assert pattern.detail.type == "ACTIVITY_PATTERN"
        assert pattern.detail.pattern_score == 50
        assert [(s.day_type, s.time_slot) for s in pattern.detail.common_time_slots] == [("weekend", "night")]

    def test_reliability_threshold(self):
        high = make_context(target={"reliability": 65})
        reasons = generate_match_reasons(high)
        reliability = [r for r in reasons if r.detail.type == "RELIABILITY"]
        assert len(reliability) == 1
        assert reliability[0].detail.reliability_score == 65
        assert not reliability[0].is_baseline

    def test_online_and_play_time(self):
        context = make_context(viewer={"play_time": 700}, target={"play_time": 1000, "is_online": True})
        types = _types(generate_match_reasons(context))
        assert types[:2] == ["ONLINE_NOW", "PLAY_TIME"]

    def test_capped_at_five(self):
        slots = [("weekday", "evening")]
        context = make_context(
            viewer={"games": [1], "play_time": 900, "traits": flat_traits(), "schedule": slots},
            target={"games": [1], "play_time": 1000, "traits": flat_traits(), "schedule": slots,
                    "is_online": True, "reliability": 90},
        )
        assert _types(generate_match_reasons(context)) == [
            "COMMON_GAME", "STYLE_SIMILARITY", "ACTIVITY_PATTERN", "ONLINE_NOW", "PLAY_TIME",
        ]


def test_common_game_reason_follows_viewer_library_order():
    context = make_context(viewer={"games": [900, 12, 900, 300]}, target={"games": [12, 300, 900]})
    detail = generate_match_reasons(context)[0].detail
    assert detail.game_count == 3
    assert detail.top_games == ["Game 900", "Game 12"]
