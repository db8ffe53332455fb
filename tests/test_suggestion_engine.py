"""
Tests for the suggestion engine.
"""

from dam_butler.services.result_synthesizer import ResultSynthesizer
from dam_butler.services.suggestion_engine import suggest


def _kinds(suggestions):
    return [s.kind for s in suggestions]


class TestSuggestions:

    def test_generic_request(self, resolver, kb):
        intent = resolver.resolve_with_patterns("xyz")
        results = ResultSynthesizer(kb).synthesize(intent)

        assert _kinds(suggest(intent, results)) == [
            "specify_product",
            "add_specificity",
            "specify_use_case",
        ]

    def test_empty_results_with_product(self, make_intent):
        intent = make_intent(product="BES985", sections=["logos"], use_case="presentation", region="AU")
        suggestions = suggest(intent, [])

        assert _kinds(suggestions) == ["broaden_search"]
        assert "Oracle Jet photography" in suggestions[0].recommended_action

    def test_empty_results_without_product(self, make_intent):
        suggestions = suggest(make_intent(use_case="web", region="US", confidence=0.9), [])
        assert _kinds(suggestions) == ["broaden_search", "specify_product"]
        assert "Breville espresso machine logos" in suggestions[0].recommended_action

    def test_specify_region_for_global_product(self, resolver, kb):
        intent = resolver.resolve_with_patterns("Oracle Jet logo for my presentation")
        suggestions = suggest(intent, ResultSynthesizer(kb).synthesize(intent))

        assert _kinds(suggestions) == ["specify_region"]

    def test_lower_confidence_only_adds(self, make_intent):
        confident = make_intent(product="BES985", sections=["logos"], use_case="web", confidence=0.9)
        unsure = confident.model_copy(update={"confidence": 0.5})

        before = set(_kinds(suggest(confident, [])))
        after = set(_kinds(suggest(unsure, [])))

        assert before <= after
        assert after - before == {"add_specificity"}

    def test_cross_sell_lifestyle(self, resolver):
        intent = resolver.resolve_with_patterns("Sage product photos for UK market")
        suggestions = suggest(intent, [])

        lifestyle = [s for s in suggestions if s.kind == "cross_sell_lifestyle"]
        assert len(lifestyle) == 1
        assert lifestyle[0].recommended_action.startswith('Try: "Sage lifestyle scene lifestyle scene')

    def test_cross_sell_video(self, make_intent):
        intent = make_intent(product="BES985", sections=["social_media"], use_case="social", region="AU")
        suggestions = suggest(intent, [])

        video = [s for s in suggestions if s.kind == "cross_sell_video"]
        assert video[0].recommended_action == 'Try: "Oracle Jet demo video" or "how to use Oracle Jet"'

    def test_no_cross_sell_with_two_sections(self, make_intent):
        intent = make_intent(product="BES985", sections=["product_photography", "logos"], region="AU")
        assert "cross_sell_lifestyle" not in _kinds(suggest(intent, []))
