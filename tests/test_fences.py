"""
Fence scanner tests

Locating closed fences, skipping unclosed openers, and the
inside-a-fence query every preprocessor relies on.
"""

from docdown.lib.fences import fenceRanges_find, fence_isInside, fences_find


class TestFencesFind:
    """Scanning raw Markdown for fences"""

    def test_single_fence(self):
        """Offsets, language and body of one fence"""
        text = "text\n```js\nx\n```\nmore"
        fences = fences_find(text)

        assert len(fences) == 1
        fence = fences[0]
        assert fence.language == "js"
        assert fence.body == "x\n"
        assert text[fence.start:fence.end] == "```js\nx\n```"
        assert text[fence.body_start:fence.body_end] == "x\n"

    def test_no_language(self):
        """Bare fence has no language"""
        fence = fences_find("```\nplain\n```")[0]
        assert fence.language is None

    def test_info_string_kept(self):
        """Info string is stripped but otherwise intact"""
        fence = fences_find("```ts [app.ts] {1,2}\nx\n```")[0]
        assert fence.info == "ts [app.ts] {1,2}"
        assert fence.language == "ts"

    def test_unclosed_fence_is_not_a_fence(self):
        """An opener without a closer yields nothing"""
        assert fences_find("```js\nnever closed\n") == []

    def test_inline_triple_backticks_ignored(self):
        """```x``` on one line is not an opener"""
        assert fences_find("```x```\nbody\n```y```") == []

    def test_tilde_fence_contains_backticks(self):
        """A tilde fence is closed only by tildes"""
        fences = fences_find("~~~\n```\n~~~\n")
        assert len(fences) == 1
        assert fences[0].marker == "~~~"
        assert fences[0].body == "```\n"

    def test_longer_closer_does_not_close(self):
        """The closer must be exactly the opener's marker"""
        text = "```\na\n````\nb\n```\n"
        fences = fences_find(text)
        assert len(fences) == 1
        assert fences[0].body == "a\n````\nb\n"

    def test_several_fences_in_order(self):
        """Fences are returned in document order"""
        text = "```a\n1\n```\n\n```b\n2\n```\n"
        assert [fence.language for fence in fences_find(text)] == ["a", "b"]


class TestFenceIsInside:
    """Position queries"""

    def test_position_inside_and_outside(self):
        """Offsets in the fence, markers included, are inside"""
        text = ":::note\n```md\n:::note\n```\n"
        inner = text.index(":::note", 1)
        assert fence_isInside(text, inner)
        assert not fence_isInside(text, 0)
        assert fence_isInside(text, text.index("```"))

    def test_ranges(self):
        """One half-open range per fence"""
        text = "a\n```\nb\n```\nc"
        ranges = fenceRanges_find(text)
        assert len(ranges) == 1
        assert text[ranges[0].start:ranges[0].stop] == "```\nb\n```"
