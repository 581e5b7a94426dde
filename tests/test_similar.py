"""Tests for replacing similar (``like``) components."""

import pytest

from alaraprep.composition.component import Component, ComponentKind
from alaraprep.composition.density import AbsoluteDensity
from alaraprep.composition.mixture import Mixture, resolve_similar
from alaraprep.errors import MixtureNotFoundError, SimilarCycleError


def comp(name, fraction, kind=ComponentKind.ELEMENT):
    return Component(kind, name, AbsoluteDensity(1.0), fraction)


def like(name, fraction):
    return Component(ComponentKind.SIMILAR, name, AbsoluteDensity(0.0), fraction)


class TestReplaceSimilar:
    """Tests for splicing one mixture into another."""

    def test_splice_scales_and_keeps_successor(self):
        """k copied components, each scaled, followed by the old successor."""
        other = Mixture("N", [comp("fe", 0.4), comp("cr", 0.6), comp("ni", 0.25)])
        tail = comp("h", 0.2)
        mix = Mixture("M", [comp("c", 0.3), like("N", 0.5), tail])

        last = mix.replace_similar(1, other)

        assert last == 3
        assert len(mix.components) == 5
        names = [c.name for c in mix.components]
        assert names == ["c", "fe", "cr", "ni", "h"]
        fractions = [c.volume_fraction for c in mix.components]
        assert fractions == pytest.approx([0.3, 0.2, 0.3, 0.125, 0.2])
        assert mix.components[last + 1] is tail

    def test_source_untouched(self):
        """The referenced mixture keeps its own components."""
        other = Mixture("N", [comp("fe", 0.4)])
        mix = Mixture("M", [like("N", 0.5)])

        mix.replace_similar(0, other)

        assert other.components[0].volume_fraction == 0.4
        assert mix.components[0] is not other.components[0]

    def test_similar_at_end(self):
        other = Mixture("N", [comp("fe", 1.0), comp("cr", 1.0)])
        mix = Mixture("M", [comp("c", 0.5), like("N", 0.5)])

        assert mix.replace_similar(1, other) == 2
        assert [c.name for c in mix.components] == ["c", "fe", "cr"]

    def test_empty_reference_removes_component(self):
        mix = Mixture("M", [comp("c", 0.5), like("N", 0.5), comp("h", 0.5)])
        last = mix.replace_similar(1, Mixture("N"))

        assert last == 0
        assert [c.name for c in mix.components] == ["c", "h"]

    def test_declared_fraction_unchanged(self):
        """The mixture's declared volume fraction counts the similar line once."""
        other = Mixture("N", [comp("fe", 0.4), comp("cr", 0.6)])
        mix = Mixture("M", [like("N", 0.5)])
        mix.replace_similar(0, other)
        assert mix.volume_fraction == pytest.approx(0.5)

    def test_not_similar(self):
        mix = Mixture("M", [comp("c", 1.0)])
        with pytest.raises(ValueError):
            mix.replace_similar(0, Mixture("N"))


class TestResolveSimilar:
    """Tests for resolving references across a problem."""

    def test_chain(self):
        """References to mixtures that are themselves similar collapse."""
        c = Mixture("C", [comp("fe", 1.0)])
        b = Mixture("B", [like("C", 0.5), comp("cr", 0.5)])
        a = Mixture("A", [like("B", 0.4)])

        resolve_similar({"A": a, "B": b, "C": c})

        assert not a.has_similar()
        assert [x.name for x in a.components] == ["fe", "cr"]
        assert [x.volume_fraction for x in a.components] == pytest.approx([0.2, 0.2])

    def test_multiple_references(self):
        n = Mixture("N", [comp("fe", 1.0)])
        m = Mixture("M", [like("N", 0.25), comp("c", 0.5), like("N", 0.25)])

        resolve_similar([n, m])

        assert [x.name for x in m.components] == ["fe", "c", "fe"]

    def test_missing_mixture(self):
        m = Mixture("M", [like("ghost", 1.0)])
        with pytest.raises(MixtureNotFoundError) as excinfo:
            resolve_similar([m])
        assert excinfo.value.name == "ghost"
        assert excinfo.value.code == 312

    def test_cycle(self):
        a = Mixture("A", [like("B", 1.0)])
        b = Mixture("B", [like("A", 1.0)])
        with pytest.raises(SimilarCycleError):
            resolve_similar([a, b])

    def test_self_reference(self):
        a = Mixture("A", [comp("fe", 0.5), like("A", 0.5)])
        with pytest.raises(SimilarCycleError):
            resolve_similar([a])
