#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
几何规划测试
"""

import pytest

from reelcut.core.errors import DimensionProbeError
from reelcut.core.geometry import (
    Rotate,
    Crop,
    ScaleAndPad,
    NormalizeFrameRate,
    RemapTimestamps,
    plan_operations,
    effective_dimensions,
)
from reelcut.core.params import ResolvedParameters


def _params(**kwargs):
    kwargs.setdefault("input_path", "/videos/clip.mp4")
    return ResolvedParameters(**kwargs)


class TestScenarios:
    """端到端场景"""

    def test_landscape_to_hd(self, counting_probe):
        """1920x1080 缩放到 HD"""
        probe = counting_probe(1920, 1080)
        plan = plan_operations(_params(target_size="HD"), probe)
        assert plan == [ScaleAndPad(1280, 720), NormalizeFrameRate(24)]

    def test_portrait_rotate_square_crop(self, counting_probe):
        """1080x1920 旋转 90 度，正方形裁剪后缩放到 512x512"""
        probe = counting_probe(1080, 1920)
        params = _params(rotation=90, crop_ratio="1:1", target_size="512x512")
        plan = plan_operations(params, probe)
        assert plan == [
            Rotate(90),
            Crop("1:1"),
            ScaleAndPad(512, 512),
            NormalizeFrameRate(24),
        ]

    def test_speed_change_is_last(self, counting_probe):
        plan = plan_operations(_params(speed_modifier=2.0), counting_probe(1920, 1080))
        assert isinstance(plan[-1], RemapTimestamps)
        assert plan[-1].factor == 0.5


class TestScaleDecision:
    """缩放是否必要的判断"""

    def test_square_crop_matching_target_skips_scale(self, counting_probe):
        probe = counting_probe(1280, 720)
        plan = plan_operations(_params(crop_ratio="1:1", target_size="720x720"), probe)
        assert plan == [Crop("1:1"), NormalizeFrameRate(24)]

    def test_square_crop_with_vertical_rotation_skips_scale(self, counting_probe):
        probe = counting_probe(1280, 720)
        params = _params(rotation=270, crop_ratio="1:1", target_size="720x720")
        plan = plan_operations(params, probe)
        assert plan == [Rotate(270), Crop("1:1"), NormalizeFrameRate(24)]

    def test_square_crop_mismatch_scales(self, counting_probe):
        probe = counting_probe(1920, 1080)
        plan = plan_operations(_params(crop_ratio="1:1", target_size="1024x1024"), probe)
        assert ScaleAndPad(1024, 1024) in plan

    @pytest.mark.parametrize("crop", ["none", "16:9", "9:16"])
    def test_non_square_crop_always_scales(self, crop, counting_probe):
        """非正方形裁剪配合目标尺寸时总是缩放，即使源尺寸已等于目标"""
        probe = counting_probe(1920, 1080)
        plan = plan_operations(_params(crop_ratio=crop, target_size="FHD"), probe)
        assert ScaleAndPad(1920, 1080) in plan

    @pytest.mark.parametrize("rotation", [90, 270])
    def test_vertical_rotation_swaps_target(self, rotation, counting_probe):
        probe = counting_probe(1920, 1080)
        plan = plan_operations(_params(rotation=rotation, target_size="HD"), probe)
        assert ScaleAndPad(720, 1280) in plan

    def test_half_turn_keeps_target(self, counting_probe):
        probe = counting_probe(1920, 1080)
        plan = plan_operations(_params(rotation=180, target_size="HD"), probe)
        assert plan == [Rotate(180), ScaleAndPad(1280, 720), NormalizeFrameRate(24)]


class TestProbeUsage:
    """分辨率探测调用"""

    def test_no_probe_without_square_crop_or_target(self, counting_probe):
        probe = counting_probe(1920, 1080)
        plan = plan_operations(_params(rotation=90, crop_ratio="16:9"), probe)
        assert probe.calls == []
        assert plan == [Rotate(90), Crop("16:9"), NormalizeFrameRate(24)]

    def test_probe_called_once(self, counting_probe):
        probe = counting_probe(1920, 1080)
        plan_operations(_params(crop_ratio="1:1", target_size="HD"), probe)
        assert probe.calls == ["/videos/clip.mp4"]

    def test_square_crop_alone_probes(self, counting_probe):
        probe = counting_probe(1920, 1080)
        plan_operations(_params(crop_ratio="1:1"), probe)
        assert len(probe.calls) == 1

    def test_probe_failure_propagates(self):
        def failing_probe(path):
            raise DimensionProbeError(path, "不是视频文件")

        with pytest.raises(DimensionProbeError):
            plan_operations(_params(target_size="HD"), failing_probe)


class TestEffectiveDimensions:
    """参考尺寸计算"""

    def test_square_crop_uses_short_side(self):
        assert effective_dimensions(_params(crop_ratio="1:1"), (1920, 1080)) == (1080, 1080)

    def test_vertical_rotation_swaps(self):
        assert effective_dimensions(_params(rotation=90), (1920, 1080)) == (1080, 1920)

    def test_non_square_crop_keeps_source(self):
        assert effective_dimensions(_params(crop_ratio="9:16"), (1920, 1080)) == (1920, 1080)


class TestPlanShape:
    """计划的顺序与内容"""

    def test_default_plan_only_normalizes_fps(self, counting_probe):
        assert plan_operations(_params(), counting_probe(1, 1)) == [NormalizeFrameRate(24)]

    def test_full_order(self, counting_probe):
        params = _params(
            rotation=90, crop_ratio="9:16", target_size="HD", speed_modifier=0.5
        )
        plan = plan_operations(params, counting_probe(1920, 1080))
        assert [type(op) for op in plan] == [
            Rotate, Crop, ScaleAndPad, NormalizeFrameRate, RemapTimestamps
        ]
        assert plan[-1].factor == 2.0
