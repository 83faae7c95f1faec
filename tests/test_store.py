"""Tests for the shared research store."""

from mcp_server_deep_research.research.models import Learning
from mcp_server_deep_research.research.store import ResearchStore

from .fakes import make_result


class TestTopic:
    def test_topic_set_once(self):
        store = ResearchStore()
        assert store.set_topic("original") is True
        assert store.set_topic("recursive prompt") is False
        assert store.topic == "original"


class TestQueries:
    def test_add_queries_is_idempotent_and_ordered(self):
        store = ResearchStore()
        store.add_queries(["b", "a"])
        store.add_queries(["a", "c", "b"])
        assert store.queries == ["b", "a", "c"]

    def test_completed_queries_are_subset_of_queries(self):
        store = ResearchStore()
        store.add_queries(["q1"])
        store.mark_completed("q1")
        store.mark_completed("q2")
        store.mark_completed("q1")
        assert store.completed_queries == ["q1", "q2"]
        assert set(store.completed_queries) <= set(store.queries)
        assert store.is_completed("q2")
        assert not store.is_completed("q3")


class TestResults:
    def test_add_results_dedups_by_url(self):
        store = ResearchStore()
        first = store.add_results([make_result("u1"), make_result("u2")])
        second = store.add_results([make_result("u1", title="Another title"), make_result("u3")])

        assert [r.url for r in first] == ["u1", "u2"]
        assert [r.url for r in second] == ["u3"]
        assert store.known_urls() == ["u1", "u2", "u3"]
        # The first copy of a URL wins
        assert store.search_results[0].title == "Title for u1"
        assert store.has_url("u2")

    def test_empty_store(self):
        store = ResearchStore()
        assert store.is_empty
        store.add_results([make_result("u1")])
        assert not store.is_empty


class TestBudget:
    def test_unbounded_by_default(self):
        store = ResearchStore()
        for i in range(10):
            store.add_learning(Learning(learning=f"l{i}"))
        assert not store.budget_exhausted

    def test_exhausted_at_limit(self):
        store = ResearchStore(max_learnings=2)
        store.add_learning(Learning(learning="one"))
        assert not store.budget_exhausted
        store.add_learning(Learning(learning="two"))
        assert store.budget_exhausted


class TestPayload:
    def test_payload_contains_everything(self):
        store = ResearchStore()
        store.set_topic("topic")
        store.add_queries(["q1"])
        store.mark_completed("q1")
        store.add_results([make_result("u1")])
        store.add_learning(Learning(learning="insight", follow_up_questions=["why?"]))

        payload = store.to_payload()
        assert payload["query"] == "topic"
        assert payload["queries"] == ["q1"]
        assert payload["completedQueries"] == ["q1"]
        assert payload["searchResults"] == [{"title": "Title for u1", "url": "u1", "content": "Content about u1"}]
        assert payload["learnings"] == [{"learning": "insight", "followUpQuestions": ["why?"]}]

    def test_summary_counts(self):
        store = ResearchStore()
        store.set_topic("topic")
        store.add_queries(["q1", "q2"])
        store.mark_completed("q1")
        assert store.summary() == {
            "topic": "topic",
            "queries": 2,
            "completed_queries": 1,
            "search_results": 0,
            "learnings": 0,
        }
