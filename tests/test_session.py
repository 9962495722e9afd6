"""Tests for the generation session state machine."""

from __future__ import annotations

import asyncio

import pytest

from studio.pollinations import build_image_url
from studio.presets import Quality, Resolution, Style, enhance_prompt
from studio.session import (
    EMPTY_PROMPT_MESSAGE,
    EMPTY_PROMPT_REASON,
    Failed,
    GenerationOptions,
    Generating,
    Idle,
    Succeeded,
)
from studio.status import ERROR, INFO, SUCCESS


class TestGenerationOptions:
    def test_coerces_raw_values_to_enums(self, options):
        assert options.style is Style.CYBERPUNK
        assert options.resolution is Resolution.LANDSCAPE_1536
        assert options.quality is Quality.HIGH

    @pytest.mark.parametrize(
        "field, value",
        [("style", "watercolor"), ("resolution", "640x480"), ("quality", "max"), ("count", 3)],
    )
    def test_rejects_values_outside_option_sets(self, field, value):
        with pytest.raises(ValueError):
            GenerationOptions(prompt_text="cat", **{field: value})

    def test_accepts_count_from_dropdown_string(self):
        assert GenerationOptions(prompt_text="cat", count="2").count == 2

    def test_trimmed_prompt(self, options):
        assert options.trimmed_prompt == "A lighthouse on a cliff at dusk"


class TestEnhancePrompt:
    def test_standard_quality_has_no_suffix(self):
        assert enhance_prompt("a cat", Style.ABSTRACT, Quality.STANDARD) == (
            "abstract, geometric shapes, minimalism, a cat"
        )

    def test_ultra_quality_appends_suffix(self):
        assert enhance_prompt("a cat", Style.CARTOON, Quality.ULTRA) == (
            "cartoon, cel-shaded, bold outlines, flat colors, a cat, ultra-detailed, crisp focus, 8k"
        )


class TestBuildBatch:
    def test_batch_contents(self, session, options):
        images = session.build_batch(options)

        assert len(images) == 4
        assert [img.seed for img in images] == [1000, 1001, 1002, 1003]
        for img in images:
            assert img.original_prompt == "A lighthouse on a cliff at dusk"
            assert img.style is Style.CYBERPUNK
            assert img.resolution is Resolution.LANDSCAPE_1536
            assert img.quality is Quality.HIGH
            assert (img.width, img.height) == (1536, 1024)

    def test_urls_carry_enhanced_prompt_model_and_enhance_flag(self, session, options):
        image = session.build_batch(options)[0]
        enhanced = (
            "cyberpunk, neon lights, rain-soaked streets, holograms, high contrast, "
            "A lighthouse on a cliff at dusk, high detail, sharp focus"
        )
        assert image.url == build_image_url(enhanced, 1536, 1024, 1000, model="flux", enhance=True)

    def test_standard_quality_sends_no_enhance_flag(self, session):
        opts = GenerationOptions(prompt_text="cat", quality="standard")
        image = session.build_batch(opts)[0]
        assert "enhance=" not in image.url
        assert "model=flux" in image.url

    def test_does_not_change_state(self, session, options):
        session.build_batch(options)
        assert isinstance(session.state, Idle)


class TestStart:
    @pytest.mark.asyncio
    async def test_valid_prompt_succeeds(self, session, options, status_board):
        state = await session.start(options)

        assert isinstance(state, Succeeded)
        assert len(state.images) == 4
        assert len({img.seed for img in state.images}) == 4
        assert session.images == state.images
        assert status_board.current().kind == SUCCESS
        assert status_board.current().message == "Successfully generated 4 images!"

    @pytest.mark.asyncio
    async def test_single_image_message(self, session, status_board):
        await session.start(GenerationOptions(prompt_text="cat"))
        assert status_board.current().message == "Successfully generated 1 image!"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
    async def test_empty_prompt_fails(self, session, status_board, prompt):
        transitions = []
        session.add_listener(transitions.append)

        state = await session.start(GenerationOptions(prompt_text=prompt, count=4))

        assert state == Failed(EMPTY_PROMPT_REASON)
        assert session.images == ()
        assert transitions == [Failed(EMPTY_PROMPT_REASON)]
        assert status_board.current().kind == ERROR
        assert status_board.current().message == EMPTY_PROMPT_MESSAGE

    @pytest.mark.asyncio
    async def test_transitions_through_generating(self, session, options):
        transitions = []
        session.add_listener(transitions.append)

        await session.start(options)

        assert [type(s) for s in transitions] == [Generating, Succeeded]
        assert transitions[0].options == options

    @pytest.mark.asyncio
    async def test_info_notice_while_generating(self, session, options, status_board):
        run = asyncio.create_task(session.start(options))
        await asyncio.sleep(0)

        assert session.is_generating
        assert status_board.current().kind == INFO
        await run

    @pytest.mark.asyncio
    async def test_second_start_while_generating_is_ignored(self, session, options, status_board):
        session.pacing_delay = 0.05
        transitions = []
        session.add_listener(transitions.append)

        first = asyncio.create_task(session.start(options))
        await asyncio.sleep(0)
        notice = status_board.current()

        second = await session.start(GenerationOptions(prompt_text="something else", count=1))
        assert isinstance(second, Generating)
        assert status_board.current() is notice

        final = await first
        assert len(final.images) == 4
        assert [type(s) for s in transitions] == [Generating, Succeeded]

    @pytest.mark.asyncio
    async def test_empty_prompt_while_generating_is_ignored(self, session, options):
        session.pacing_delay = 0.05
        first = asyncio.create_task(session.start(options))
        await asyncio.sleep(0)

        state = await session.start(GenerationOptions(prompt_text=""))
        assert isinstance(state, Generating)
        assert isinstance(await first, Succeeded)

    @pytest.mark.asyncio
    async def test_new_batch_replaces_previous(self, session, options):
        first = await session.start(options)
        second = await session.start(GenerationOptions(prompt_text="a red bicycle", count=2))

        assert len(second.images) == 2
        assert session.images == second.images
        assert {img.seed for img in first.images}.isdisjoint({img.seed for img in second.images})

    @pytest.mark.asyncio
    async def test_recovers_from_failure(self, session, options):
        await session.start(GenerationOptions(prompt_text=" "))
        state = await session.start(options)
        assert isinstance(state, Succeeded)

    @pytest.mark.asyncio
    async def test_cancelled_during_pacing_still_publishes(self, session, options, status_board):
        session.pacing_delay = 0.5
        run = asyncio.create_task(session.start(options))
        await asyncio.sleep(0.01)
        assert session.is_generating

        run.cancel()
        with pytest.raises(asyncio.CancelledError):
            await run

        assert isinstance(session.state, Succeeded)
        assert len(session.images) == 4
        assert status_board.current().kind == SUCCESS

        session.pacing_delay = 0
        state = await session.start(GenerationOptions(prompt_text="a red bicycle", count=2))
        assert isinstance(state, Succeeded)
        assert [img.original_prompt for img in state.images] == ["a red bicycle"] * 2
