"""
Tests for processor selection and the mock processor.
"""
import asyncio

import pytest
from PIL import Image

from color_analyzer.config import config
from color_analyzer.schemas import FilterType
from color_analyzer.services.imaging import encode_png_base64
from color_analyzer.services.processors import (
    MOCK_COLORS, LocalProcessor, MockProcessor, get_processor
)


def test_get_processor_follows_config(monkeypatch):
    assert isinstance(get_processor(), LocalProcessor)
    
    monkeypatch.setattr(config, "PROCESSOR", "mock")
    assert isinstance(get_processor(), MockProcessor)


def test_get_processor_rejects_unknown():
    with pytest.raises(ValueError):
        get_processor("gpu")


def test_local_processor_validates_settings():
    with pytest.raises(ValueError):
        LocalProcessor(k=0)
    with pytest.raises(ValueError):
        LocalProcessor(max_edge=1)


def test_mock_processor_returns_copy_of_fixed_palette():
    processor = MockProcessor(analyze_delay_ms=0, filter_delay_ms=0)
    
    colors = asyncio.run(processor.analyze(Image.new("RGB", (2, 2))))
    colors.append("#000000")
    
    assert len(MOCK_COLORS) == 18
    assert asyncio.run(processor.analyze(Image.new("RGB", (2, 2)))) == MOCK_COLORS


def test_mock_processor_filter_returns_png():
    processor = MockProcessor(analyze_delay_ms=0, filter_delay_ms=0)
    
    payload = asyncio.run(processor.apply_filter(Image.new("RGB", (2, 2)), FilterType.SEPIA))
    
    assert isinstance(payload, str) and payload


def test_local_processor_downscales_before_clustering():
    processor = LocalProcessor(k=2, max_edge=32)
    image = Image.new("RGB", (400, 100), color=(0, 128, 255))
    
    assert asyncio.run(processor.analyze(image)) == ["#0080FF"]


def test_mock_processor_encodes_off_the_event_loop(monkeypatch):
    calls = []
    
    async def fake_threadpool(func, *args):
        calls.append(func)
        return func(*args)
    
    monkeypatch.setattr("color_analyzer.services.processors.run_in_threadpool", fake_threadpool)
    processor = MockProcessor(analyze_delay_ms=0, filter_delay_ms=0)
    
    payload = asyncio.run(processor.apply_filter(Image.new("RGB", (2, 2)), FilterType.NEGATIVE))
    
    assert calls == [encode_png_base64]
    assert payload == encode_png_base64(Image.new("RGB", (2, 2)))
