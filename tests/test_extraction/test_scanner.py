"""Tests for candidate scanning."""

import pytest

from campaign_extractor.entities.schema import EntityKind
from campaign_extractor.extraction.config import ExtractorConfig
from campaign_extractor.extraction.extractors.scanner import CandidateScanner


@pytest.fixture
def scanner(tables):
    """Scanner over the default tables, without a gazetteer."""
    return CandidateScanner(tables)


class TestNPCPatterns:
    """Test NPC pattern matching."""

    def test_role_apposition(self, scanner):
        """Test "<Name> the <role>" captures the role."""
        mentions = scanner.scan("Durnan the barkeep served drinks.", EntityKind.NPC)

        assert len(mentions) == 1
        assert mentions[0].title == "Durnan"
        assert mentions[0].attributes == {"role": "barkeep"}
        assert mentions[0].pattern == "role_apposition"

    def test_comma_apposition(self, scanner):
        """Test "<Name>, the <role>" captures the role."""
        mentions = scanner.scan("Bonnie, the barmaid, waved.", EntityKind.NPC)

        assert [m.title for m in mentions] == ["Bonnie"]
        assert mentions[0].attributes["role"] == "barmaid"

    def test_race_and_class_tags(self, scanner):
        """Test that race and class descriptors become tags."""
        mentions = scanner.scan("We hired Yagra, a half-orc fighter, as a guide.", EntityKind.NPC)

        assert [m.title for m in mentions] == ["Yagra"]
        assert mentions[0].attributes["tags"] == ["race:half-orc", "class:fighter"]

    def test_faction_member(self, scanner):
        """Test that faction membership is captured."""
        mentions = scanner.scan("Davil, an agent of the Zhentarim, watched us.", EntityKind.NPC)

        assert mentions[0].title == "Davil"
        assert mentions[0].attributes == {"role": "agent", "faction": "Zhentarim"}

    def test_introduction(self, scanner):
        """Test "named <Name>" introductions."""
        mentions = scanner.scan("A half-orc named Yagra joined us.", EntityKind.NPC)
        assert [m.title for m in mentions] == ["Yagra"]

    def test_leading_stop_word_trimmed(self, scanner):
        """Test that "When Durnan" becomes "Durnan" with an adjusted span."""
        text = "When Durnan said nothing, the room fell quiet."
        mentions = scanner.scan(text, EntityKind.NPC)

        assert [m.title for m in mentions] == ["Durnan"]
        assert mentions[0].match_span == (5, 11)
        assert text[5:11] == "Durnan"

    def test_pronouns_rejected(self, scanner):
        """Test that "They" and "The" are never NPCs."""
        assert scanner.scan("They said nothing.", EntityKind.NPC) == []
        assert scanner.scan("The party went with They to find The.", EntityKind.NPC) == []

    def test_excluded_words_rejected(self, scanner):
        """Test that place words disqualify NPC titles."""
        assert scanner.scan("Portal Keeper said hello.", EntityKind.NPC) == []

    def test_short_title_rejected(self, scanner):
        """Test the minimum title length."""
        assert scanner.scan("Al said hi.", EntityKind.NPC) == []


class TestLocationPatterns:
    """Test location pattern matching."""

    def test_named_with_type_noun(self, scanner):
        """Test that the adjacent type noun is kept as a hint."""
        mentions = scanner.scan("We rested at the Yawning Portal tavern, as usual.", EntityKind.LOCATION)

        assert len(mentions) == 1
        assert mentions[0].title == "Yawning Portal"
        assert mentions[0].hint == "tavern"
        assert mentions[0].pattern == "named_with_type_noun"

    def test_appositive_type(self, scanner):
        """Test "<Name>, the <adjective> <noun>"."""
        mentions = scanner.scan(
            "They sailed into Waterdeep, the greatest city of the Sword Coast.",
            EntityKind.LOCATION,
        )

        assert [m.title for m in mentions] == ["Waterdeep"]
        assert mentions[0].hint == "city"

    def test_type_of_name(self, scanner):
        """Test "the <noun> of <Name>"."""
        mentions = scanner.scan("Rumors came from the village of Phandalin.", EntityKind.LOCATION)

        assert [m.title for m in mentions] == ["Phandalin"]
        assert mentions[0].hint == "village"

    def test_preposition_without_hint(self, scanner):
        """Test that prepositional mentions carry no hint."""
        mentions = scanner.scan("The heroes descended into Undermountain.", EntityKind.LOCATION)

        assert [m.title for m in mentions] == ["Undermountain"]
        assert mentions[0].hint is None

    def test_possessive_name(self, scanner):
        """Test that an internal possessive stays in the name."""
        mentions = scanner.scan("The party returned to Baldur's Gate.", EntityKind.LOCATION)
        assert [m.title for m in mentions] == ["Baldur's Gate"]

    def test_capitalized_preposition(self, scanner):
        """Test a sentence-initial preposition."""
        mentions = scanner.scan("From Baldur's Gate they sailed.", EntityKind.LOCATION)

        assert [m.title for m in mentions] == ["Baldur's Gate"]
        assert mentions[0].pattern == "preposition"

    def test_generic_words_rejected(self, scanner):
        """Test that heading words are not places."""
        assert scanner.scan("A Friend in Need", EntityKind.LOCATION) == []


class TestItemPatterns:
    """Test item pattern matching."""

    def test_described_item(self, scanner):
        """Test "her ancestral blade"."""
        mentions = scanner.scan("Talia drew her ancestral blade.", EntityKind.ITEM)

        assert [m.title for m in mentions] == ["ancestral blade"]
        assert mentions[0].hint == "blade"

    def test_bonus_weapon(self, scanner):
        """Test "+1 longsword"."""
        mentions = scanner.scan("Talia found a +1 longsword in the chest.", EntityKind.ITEM)

        assert [m.title for m in mentions] == ["+1 longsword"]
        assert mentions[0].hint == "longsword"

    def test_possessive_owner(self, scanner):
        """Test that the possessor becomes the owner."""
        mentions = scanner.scan("She took Durnan's old sword from the wall.", EntityKind.ITEM)

        assert [m.title for m in mentions] == ["old sword"]
        assert mentions[0].attributes == {"owner": "Durnan"}

    def test_named_artifact(self, scanner):
        """Test "<Noun> of <Name>" artifacts."""
        mentions = scanner.scan("The Bag of Holding was empty.", EntityKind.ITEM)

        assert [m.title for m in mentions] == ["Bag of Holding"]
        assert mentions[0].hint == "bag"


class TestQuestPatterns:
    """Test quest pattern matching."""

    def test_commissioned_quest(self, scanner):
        """Test that the quest giver becomes the owner."""
        text = "Volo asked the party to find Floon Blagmaar."
        mentions = scanner.scan(text, EntityKind.QUEST)

        assert len(mentions) == 1
        assert mentions[0].title == "Find Floon Blagmaar"
        assert mentions[0].attributes == {"status": "active", "owner": "Volo"}
        assert mentions[0].pattern == "commissioned"
        start, end = mentions[0].match_span
        assert text[start:end] == "find Floon Blagmaar"

    def test_objective_keeps_article(self, scanner):
        """Test that a leading article stays in the quest object."""
        mentions = scanner.scan("We must recover the Stone of Golorr.", EntityKind.QUEST)
        assert [m.title for m in mentions] == ["Recover the Stone of Golorr"]

    def test_stated_mission(self, scanner):
        """Test free-text mission statements."""
        mentions = scanner.scan("Their mission is to escort the merchant caravan.", EntityKind.QUEST)
        assert [m.title for m in mentions] == ["Escort the merchant caravan"]

    def test_described_objective(self, scanner):
        """Test lowercase objects after a determiner."""
        text = "The party must find the lost sword and rescue the missing children."
        mentions = scanner.scan(text, EntityKind.QUEST)

        assert [m.title for m in mentions] == ["Find the lost sword", "Rescue the missing children"]
        assert {m.pattern for m in mentions} == {"described_objective"}
        start, end = mentions[0].match_span
        assert text[start:end] == "find the lost sword"

    def test_described_objective_bounded(self, scanner):
        """Test that a described object stops at three words."""
        text = "We will find the old rusty iron key somewhere."
        assert scanner.scan(text, EntityKind.QUEST) == []

    def test_noise_object_rejected(self, scanner):
        """Test that "save the party" is not a quest."""
        assert scanner.scan("Only Talia could save the party.", EntityKind.QUEST) == []

    def test_stop_word_object_rejected(self, scanner):
        """Test that "find The" is not a quest."""
        assert scanner.scan("The party went with They to find The.", EntityKind.QUEST) == []


class TestSelection:
    """Test ordering, overlap removal and context windows."""

    def test_text_order(self, scanner):
        """Test that mentions are returned in text order."""
        text = "Volo said hello. Durnan the barkeep nodded. Bonnie, the barmaid, laughed."
        mentions = scanner.scan(text, EntityKind.NPC)

        assert [m.title for m in mentions] == ["Volo", "Durnan", "Bonnie"]

    def test_overlap_prefers_earlier_pattern(self, scanner):
        """Test that a preposition match does not duplicate a typed match."""
        mentions = scanner.scan("We stayed at the Yawning Portal tavern.", EntityKind.LOCATION)

        assert len(mentions) == 1
        assert mentions[0].pattern == "named_with_type_noun"

    def test_context_window(self, scanner):
        """Test that the window extends W characters on each side."""
        text = "x " * 50 + "Durnan the barkeep poured ale for everyone in the room " + "y " * 50
        mention = scanner.scan(text, EntityKind.NPC)[0]

        start, end = mention.match_span
        assert mention.context_window == text[start - 60 : end + 60]

    def test_custom_window(self, tables):
        """Test a configured window width."""
        scanner = CandidateScanner(tables, ExtractorConfig(context_window=3))
        mention = scanner.scan("So Durnan the barkeep said.", EntityKind.NPC)[0]

        assert mention.context_window == "So Durnan th"

    def test_no_candidates(self, scanner):
        """Test that finding nothing is a normal outcome."""
        assert scanner.scan("nothing happened at all.", EntityKind.LOCATION) == []
