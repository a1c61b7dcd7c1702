"""Tests for keyword routing of assistant questions."""

import pytest

from nedc_dashboard.data.assistant import HELP_TEXT, INTENTS, Intent, QueryResult, route
from nedc_dashboard.data.filters import FilterSpec, apply_filters


class TestRouting:
    def test_ongoing_directive_and_count(self, portfolio):
        result = route("Show me ongoing projects", portfolio)
        assert result.directive == FilterSpec(statuses=("Ongoing",))
        assert result.directive.to_dict() == {"pillars": [], "states": [], "lgas": [], "statuses": ["Ongoing"]}
        assert "Found 2 ongoing projects" in result.summary
        assert result.match_count == 2

    def test_in_progress_synonym(self, portfolio):
        assert route("what is in progress?", portfolio).intent == "status:ongoing"

    def test_first_matching_intent_wins(self, portfolio):
        result = route("completed agriculture projects in Borno", portfolio)
        assert result.intent == "status:completed"
        assert result.directive.states == ()
        assert result.directive.pillars == ()
        assert set(result.directive.statuses) == {"Completed (Handed over)", "Completed (Not handed over)"}
        assert result.match_count == 2

    def test_completed_uses_substring_match(self, make_frame):
        frame = make_frame({"status": "Completed"}, {"status": "Completed (Handed over)"}, {"status": "Ongoing"})
        result = route("completed", frame)
        assert result.match_count == 2
        assert "Completed" in result.directive.statuses

    def test_state_intent(self, portfolio):
        result = route("Projects in Borno State", portfolio)
        assert result.intent == "state:borno"
        assert result.directive == FilterSpec(states=("Borno",))
        assert "Found 3 projects in Borno State" in result.summary

    def test_status_outranks_state(self, portfolio):
        assert route("abandoned projects in yobe", portfolio).intent == "status:abandoned"

    @pytest.mark.parametrize(
        "question,intent,pillar,count",
        [
            ("farming support", "pillar:agriculture", "Leadership in Agriculture", 2),
            ("any school projects?", "pillar:education", "Educated Populace", 2),
            ("medical facilities", "pillar:health", "Healthy Citizens", 2),
        ],
    )
    def test_pillar_intents(self, portfolio, question, intent, pillar, count):
        result = route(question, portfolio)
        assert result.intent == intent
        assert result.directive.pillars[0] == pillar
        assert result.match_count == count

    def test_aggregate(self, portfolio):
        result = route("How many projects are there?", portfolio)
        assert result.intent == "aggregate"
        assert result.directive is None
        assert "Total Projects: 5" in result.summary
        assert "Completed: 2" in result.summary
        assert "Abandoned: 1" in result.summary

    def test_financial(self, portfolio):
        result = route("what did it cost", portfolio)
        assert result.intent == "financial"
        assert result.directive is None
        assert "₦8,000,000" in result.summary
        assert "₦5,250,000" in result.summary
        assert "Disbursement Rate: 66%" in result.summary

    def test_financial_zero_guard(self, make_frame):
        result = route("budget", make_frame())
        assert "Disbursement Rate: 0%" in result.summary

    @pytest.mark.parametrize("question", ["", "   ", None, "hello there"])
    def test_help_fallback(self, portfolio, question):
        result = route(question, portfolio)
        assert result.summary == HELP_TEXT
        assert result.directive is None


class TestDirectiveConsistency:
    @pytest.mark.parametrize(
        "question",
        [
            "ongoing",
            "completed",
            "abandoned",
            "adamawa",
            "bauchi",
            "borno",
            "gombe",
            "taraba",
            "yobe",
            "agriculture",
            "education",
            "health",
        ],
    )
    def test_directive_reproduces_counted_subset(self, portfolio, question):
        result = route(question, portfolio)
        assert result.directive is not None
        assert len(apply_filters(portfolio, result.directive)) == result.match_count

    def test_variant_spellings_are_carried_into_directive(self, make_frame):
        frame = make_frame(
            {"state": "BORNO"},
            {"state": "Borno"},
            {"pillars": ["Agriculture"]},
        )
        state_result = route("borno", frame)
        assert state_result.match_count == 3
        assert len(apply_filters(frame, state_result.directive)) == 3

        pillar_result = route("agriculture", frame)
        assert pillar_result.match_count == 1
        assert len(apply_filters(frame, pillar_result.directive)) == 1


class TestIntentTable:
    def test_priority_order(self):
        names = [intent.name for intent in INTENTS]
        assert names[:3] == ["status:ongoing", "status:completed", "status:abandoned"]
        assert names[3:9] == [f"state:{s}" for s in ("adamawa", "bauchi", "borno", "gombe", "taraba", "yobe")]
        assert names[9:] == ["pillar:agriculture", "pillar:education", "pillar:health", "aggregate", "financial", "help"]

    def test_custom_intent_table(self, portfolio):
        intents = (Intent("ping", ("ping",), lambda df: QueryResult(summary="pong", intent="ping")),)
        assert route("ping", portfolio, intents=intents).summary == "pong"
        assert route("other", portfolio, intents=intents).summary == HELP_TEXT
