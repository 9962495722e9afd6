"""Tests for the Pollinations image URL builder."""

from __future__ import annotations

import httpx

from studio.pollinations import IMAGE_SERVICE_URL, build_image_url, encode_prompt


class TestBuildImageUrl:
    def test_includes_all_parameters(self):
        url = build_image_url("test prompt", 256, 256, 123, model="flux")
        assert "width=256" in url
        assert "height=256" in url
        assert "seed=123" in url
        assert "model=flux" in url
        assert "nologo=true" in url
        assert "/prompt/test%20prompt?" in url

    def test_full_address(self):
        url = build_image_url("test prompt", 256, 256, 123, model="flux", enhance=True)
        assert url == (
            f"{IMAGE_SERVICE_URL}/prompt/test%20prompt"
            "?width=256&height=256&seed=123&nologo=true&model=flux&enhance=true"
        )

    def test_optional_parameters_omitted_when_unset(self):
        url = build_image_url("cat", 512, 512, 7, model="", enhance=False)
        params = httpx.URL(url).params
        assert set(params.keys()) == {"width", "height", "seed", "nologo"}

    def test_deterministic(self):
        args = ("a fox in the snow", 768, 768, 42)
        assert build_image_url(*args, model="flux") == build_image_url(*args, model="flux")

    def test_distinct_seeds_give_distinct_urls(self):
        assert build_image_url("cat", 512, 512, 1) != build_image_url("cat", 512, 512, 2)

    def test_reserved_characters_cannot_inject_parameters(self):
        prompt = 'cats & dogs? seed=1 #"quoted" / slash'
        url = build_image_url(prompt, 512, 512, 99)
        parsed = httpx.URL(url)
        assert parsed.params["seed"] == "99"
        assert set(parsed.params.keys()) == {"width", "height", "seed", "nologo"}
        assert parsed.raw_path.decode("ascii").startswith("/prompt/cats%20%26%20dogs%3F")
        assert "#" not in url

    def test_prompt_encoded_exactly_once(self):
        url = build_image_url("100% real", 512, 512, 1)
        assert "/prompt/100%25%20real?" in url

    def test_custom_base_url(self):
        url = build_image_url("cat", 512, 512, 1, base_url="http://localhost:8080/")
        assert url.startswith("http://localhost:8080/prompt/cat?")


class TestEncodePrompt:
    def test_unicode_is_utf8_encoded(self):
        assert encode_prompt("café") == "caf%C3%A9"

    def test_quotes_and_slashes_are_encoded(self):
        assert encode_prompt("a/b'c\"") == "a%2Fb%27c%22"
