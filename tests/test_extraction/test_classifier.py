"""Tests for keyword subtype classification."""

import pytest

from campaign_extractor.entities.schema import EntityKind, ItemRarity, ItemType, LocationType
from campaign_extractor.extraction.classifier import TypeClassifier


@pytest.fixture
def classifier(tables):
    return TypeClassifier(tables)


class TestLocationTypes:
    """Test location subtype assignment."""

    def test_tavern_from_hint(self, classifier):
        """Test that the captured type noun decides the subtype."""
        assert classifier.classify(EntityKind.LOCATION, "Yawning Portal", "tavern") == LocationType.TAVERN

    def test_city_from_context(self, classifier):
        """Test classification from the surrounding text."""
        result = classifier.classify(
            EntityKind.LOCATION,
            "Waterdeep",
            "into Waterdeep, the greatest city of the Sword Coast",
        )
        assert result == LocationType.CITY

    def test_title_counts(self, classifier):
        """Test that keywords in the title itself count."""
        assert classifier.classify(EntityKind.LOCATION, "Temple of Gond", "") == LocationType.TEMPLE

    def test_case_insensitive(self, classifier):
        """Test that keyword matching ignores case."""
        assert classifier.classify(EntityKind.LOCATION, "Old Mill", "THE TAVERN") == LocationType.TAVERN

    def test_most_hits_win(self, classifier):
        """Test that the subtype with the most keyword hits wins."""
        context = "a temple beside the inn, with a shrine and a chapel"
        assert classifier.classify(EntityKind.LOCATION, "Old Mill", context) == LocationType.TEMPLE

    def test_tie_goes_to_earliest_declared(self, classifier):
        """Test that ties resolve to the first subtype in the table."""
        assert classifier.classify(EntityKind.LOCATION, "Old Mill", "temple tavern") == LocationType.TAVERN

    def test_whole_words_only(self, classifier):
        """Test that keywords do not match inside longer words."""
        assert classifier.classify(EntityKind.LOCATION, "Innsbrook", "") is None

    def test_no_match(self, classifier):
        """Test that no keyword means no subtype."""
        assert classifier.classify(EntityKind.LOCATION, "Xanathar", "we waited") is None


class TestItemTypes:
    """Test item subtype and rarity assignment."""

    def test_weapon(self, classifier):
        """Test "her ancestral blade"."""
        assert classifier.classify(EntityKind.ITEM, "ancestral blade", "blade") == ItemType.WEAPON

    def test_consumable(self, classifier):
        assert classifier.classify(EntityKind.ITEM, "healing potion", "potion") == ItemType.CONSUMABLE

    def test_multiword_keyword(self, classifier):
        """Test keywords containing spaces and apostrophes."""
        assert classifier.classify(EntityKind.ITEM, "old kit", "her thieves' tools") == ItemType.TOOL

    def test_rarity_from_bonus(self, classifier):
        """Test that a +2 bonus reads as rare."""
        assert classifier.classify_rarity("+2 longsword", "") == ItemRarity.RARE

    def test_very_rare_beats_rare(self, classifier):
        """Test that "very rare" wins its tie with "rare"."""
        assert classifier.classify_rarity("cloak", "a very rare cloak") == ItemRarity.VERY_RARE

    def test_no_rarity(self, classifier):
        assert classifier.classify_rarity("ancestral blade", "Talia drew her ancestral blade") is None


class TestUnsupportedKinds:
    """Test that only locations and items are classifiable."""

    @pytest.mark.parametrize("kind", [EntityKind.NPC, EntityKind.QUEST, EntityKind.SESSION_SUMMARY])
    def test_raises(self, classifier, kind):
        """Test that other kinds fail fast."""
        with pytest.raises(ValueError):
            classifier.classify(kind, "Durnan", "the barkeep")
