"""
Tests for the link simulation module.
"""

import dataclasses
import json
import math

import pytest
import numpy as np
from pathlib import Path
import tempfile

from fso_analyzer.simulation import (
    WeatherType,
    WeatherProfile,
    WEATHER_PROFILES,
    get_weather_profile,
    parse_weather,
    LinkConfig,
    DEFAULT_LINK_CONFIG,
    LinkStats,
    LinkStatus,
    LinkBudgetEstimator,
    evaluate_link,
    classify_status,
    max_distance_for_status,
)

WEATHER_ORDER = [WeatherType.CLEAR, WeatherType.HAZE, WeatherType.RAIN, WeatherType.FOG]


def sweep(weather: WeatherType, distances):
    profile = WEATHER_PROFILES[weather]
    return [evaluate_link(profile, float(d)) for d in distances]


class TestWeatherProfiles:
    """Test cases for the weather profile table."""

    def test_every_condition_has_a_profile(self):
        assert set(WEATHER_PROFILES.keys()) == set(WeatherType)

    def test_attenuation_coefficients(self):
        assert WEATHER_PROFILES[WeatherType.CLEAR].attenuation_coefficient == 0.43
        assert WEATHER_PROFILES[WeatherType.HAZE].attenuation_coefficient == 2.37
        assert WEATHER_PROFILES[WeatherType.RAIN].attenuation_coefficient == 19.2
        assert WEATHER_PROFILES[WeatherType.FOG].attenuation_coefficient == 25.5

    def test_table_is_immutable(self):
        """Neither the mapping nor the profiles can be changed at runtime."""
        with pytest.raises(TypeError):
            WEATHER_PROFILES[WeatherType.CLEAR] = WeatherProfile(attenuation_coefficient=0.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            WEATHER_PROFILES[WeatherType.FOG].attenuation_coefficient = 0.0

    def test_parse_weather(self):
        assert parse_weather("fog") == WeatherType.FOG
        assert parse_weather(" Rain ") == WeatherType.RAIN
        assert parse_weather(WeatherType.HAZE) == WeatherType.HAZE
        assert get_weather_profile("clear").label == "Clear Sky"

    def test_unknown_weather(self):
        with pytest.raises(ValueError, match="Unknown weather condition"):
            parse_weather("snow")


class TestLinkConfig:
    """Test cases for LinkConfig."""

    def test_default_constants(self):
        config = LinkConfig()
        assert config.tx_power_dbm == 20.0
        assert config.noise_floor_dbm == -50.0
        assert config.peak_throughput_gbps == 160.0
        assert config.fec_limit_log_ber == -3.0
        assert config.error_free_log_ber == -12.0
        assert config.total_users == 16
        assert config.validate() is config

    def test_config_serialization(self):
        """JSON and YAML round trips preserve every field."""
        config = LinkConfig(tx_power_dbm=23.0, noise_floor_dbm=-45.0)

        with tempfile.TemporaryDirectory() as tmpdir:
            for name in ("config.json", "config.yaml"):
                config_file = Path(tmpdir) / name
                config.save(config_file)
                assert LinkConfig.load(config_file) == config

    def test_invalid_config(self):
        with pytest.raises(ValueError, match="Error-free log-BER"):
            LinkConfig(error_free_log_ber=-3.0).validate()
        with pytest.raises(ValueError, match="Peak throughput"):
            LinkConfig.from_dict({'peak_throughput_gbps': 0.0})
        with pytest.raises(ValueError, match="BER thresholds"):
            LinkConfig(excellent_ber=1e-8, good_ber=1e-9).validate()

    def test_non_finite_config(self):
        """NaN and infinite constants are rejected, including NaN literals in JSON."""
        with pytest.raises(ValueError, match="finite"):
            LinkConfig(tx_power_dbm=float('nan')).validate()
        with pytest.raises(ValueError, match="finite"):
            LinkConfig(noise_floor_dbm=float('-inf')).validate()

        with tempfile.TemporaryDirectory() as tmpdir:
            config_file = Path(tmpdir) / "config.json"
            config_file.write_text('{"tx_power_dbm": NaN}')
            with pytest.raises(ValueError, match="tx_power_dbm"):
                LinkConfig.load(config_file)

    def test_unknown_config_keys(self):
        with pytest.raises(ValueError, match="bogus"):
            LinkConfig.from_dict({'bogus': 1, 'tx_power_dbm': 20.0})


class TestEvaluateLink:
    """Test cases for evaluate_link."""

    def test_clear_short_link(self):
        """CLEAR at 1.5 km is an excellent, full-rate link."""
        stats = evaluate_link(WEATHER_PROFILES[WeatherType.CLEAR], 1.5)

        assert stats.total_attenuation_db == pytest.approx(0.43 * 1.5 + 10 * np.log10(4.5))
        assert stats.received_power_dbm == pytest.approx(20.0 - stats.total_attenuation_db)
        assert stats.snr_db > 30
        assert stats.status == LinkStatus.EXCELLENT
        assert stats.current_throughput_gbps == pytest.approx(160.0)
        assert stats.bit_error_rate == 1e-25

    def test_fog_versus_clear(self):
        """FOG attenuates far more than CLEAR and never reports a better status."""
        clear = evaluate_link(WEATHER_PROFILES[WeatherType.CLEAR], 1.5)
        fog = evaluate_link(WEATHER_PROFILES[WeatherType.FOG], 1.5)

        assert fog.total_attenuation_db - clear.total_attenuation_db == pytest.approx((25.5 - 0.43) * 1.5)
        assert fog.snr_db < clear.snr_db
        assert fog.status.rank <= clear.status.rank

    def test_good_status_band(self):
        """FOG at 1.8 km lands between the excellent and good thresholds."""
        stats = evaluate_link(WEATHER_PROFILES[WeatherType.FOG], 1.8)

        assert stats.status == LinkStatus.GOOD
        assert 1e-12 <= stats.bit_error_rate < 1e-9
        assert 0 < stats.current_throughput_gbps < 160

    def test_adverse_link(self):
        """FOG at 15 km is dead: SNR clamps to zero and throughput to zero."""
        stats = evaluate_link(WEATHER_PROFILES[WeatherType.FOG], 15.0)

        assert stats.snr_db == 0.0
        assert stats.q_factor == pytest.approx(1.0)
        assert stats.bit_error_rate == pytest.approx(0.15866, abs=1e-4)
        assert stats.status == LinkStatus.POOR
        assert stats.current_throughput_gbps == 0.0

    def test_zero_distance(self):
        """Zero distance evaluates cleanly with no geometric loss."""
        for weather in WeatherType:
            stats = evaluate_link(WEATHER_PROFILES[weather], 0.0)
            assert stats.total_attenuation_db == 0.0
            assert stats.received_power_dbm == 20.0
            assert math.isfinite(stats.snr_db)

    def test_throughput_range_endpoints(self):
        """Throughput at 15 km never exceeds throughput at 0.1 km."""
        for weather in WeatherType:
            near, far = sweep(weather, [0.1, 15.0])
            assert far.current_throughput_gbps <= near.current_throughput_gbps

    @pytest.mark.parametrize("weather", list(WeatherType))
    def test_monotonic_in_distance(self, weather):
        """Link quality only degrades with distance."""
        results = sweep(weather, np.linspace(0.0, 15.0, 301))

        attenuation = np.array([s.total_attenuation_db for s in results])
        power = np.array([s.received_power_dbm for s in results])
        snr = np.array([s.snr_db for s in results])
        ber = np.array([s.bit_error_rate for s in results])
        throughput = np.array([s.current_throughput_gbps for s in results])

        assert np.all(np.diff(attenuation) >= 0)
        assert np.all(np.diff(power) <= 0)
        assert np.all(np.diff(snr) <= 0)
        assert np.all(np.diff(ber) >= 0)
        assert np.all(np.diff(throughput) <= 0)

    @pytest.mark.parametrize("distance", [0.1, 1.5, 5.0, 15.0])
    def test_weather_ordering(self, distance):
        """CLEAR < HAZE < RAIN < FOG in attenuation, reversed in throughput."""
        results = [evaluate_link(WEATHER_PROFILES[w], distance) for w in WEATHER_ORDER]

        attenuation = [s.total_attenuation_db for s in results]
        throughput = [s.current_throughput_gbps for s in results]

        assert attenuation == sorted(attenuation)
        assert len(set(attenuation)) == len(attenuation)
        assert throughput == sorted(throughput, reverse=True)

    def test_bounds_and_status_consistency(self):
        """Every field stays in range and status agrees with BER."""
        for weather in WeatherType:
            for stats in sweep(weather, np.linspace(0.0, 15.0, 151)):
                assert stats.snr_db >= 0
                assert stats.q_factor >= 0
                assert 0 < stats.bit_error_rate <= 1
                assert 0 <= stats.current_throughput_gbps <= 160

                if stats.bit_error_rate < 1e-12:
                    assert stats.status == LinkStatus.EXCELLENT
                elif stats.bit_error_rate < 1e-9:
                    assert stats.status == LinkStatus.GOOD
                else:
                    assert stats.status == LinkStatus.POOR

    def test_determinism(self):
        profile = WEATHER_PROFILES[WeatherType.RAIN]
        assert evaluate_link(profile, 2.345) == evaluate_link(profile, 2.345)

    def test_extreme_attenuation_is_finite(self):
        """Absurd coefficients are absorbed by clamping."""
        stats = evaluate_link(WeatherProfile(attenuation_coefficient=1e6), 1e3)
        for value in dataclasses.astuple(stats)[:-1]:
            assert math.isfinite(value)
        assert stats.status == LinkStatus.POOR

    def test_invalid_inputs(self):
        profile = WEATHER_PROFILES[WeatherType.CLEAR]
        for distance in [-0.1, float('nan'), float('inf')]:
            with pytest.raises(ValueError, match="Link distance"):
                evaluate_link(profile, distance)
        with pytest.raises(ValueError, match="Attenuation coefficient"):
            evaluate_link(WeatherProfile(attenuation_coefficient=-1.0), 1.0)
        with pytest.raises(ValueError, match="overflows"):
            evaluate_link(WeatherProfile(attenuation_coefficient=1e10), 1e300)

    def test_huge_distance_is_finite(self):
        """Geometric loss stays finite where 2*d^2 would overflow."""
        stats = evaluate_link(WEATHER_PROFILES[WeatherType.CLEAR], 1e200)

        assert math.isfinite(stats.total_attenuation_db)
        assert math.isfinite(stats.received_power_dbm)
        assert stats.status == LinkStatus.POOR

    def test_classify_status(self):
        assert classify_status(1e-13) == LinkStatus.EXCELLENT
        assert classify_status(1e-12) == LinkStatus.GOOD
        assert classify_status(1e-9) == LinkStatus.POOR

    def test_custom_config(self):
        """A stronger transmitter improves the received power one-for-one."""
        profile = WEATHER_PROFILES[WeatherType.RAIN]
        base = evaluate_link(profile, 2.0)
        boosted = evaluate_link(profile, 2.0, LinkConfig(tx_power_dbm=30.0))
        assert boosted.received_power_dbm - base.received_power_dbm == pytest.approx(10.0)

    def test_stats_to_dict(self):
        data = evaluate_link(WEATHER_PROFILES[WeatherType.HAZE], 3.0).to_dict()
        assert data['status'] in {"EXCELLENT", "GOOD", "POOR"}
        json.dumps(data)


class TestMaxDistance:
    """Test cases for max_distance_for_status."""

    def test_clear_is_excellent_over_full_range(self):
        profile = WEATHER_PROFILES[WeatherType.CLEAR]
        assert max_distance_for_status(profile, LinkStatus.EXCELLENT, 0.1, 15.0) == 15.0

    def test_fog_excellent_boundary(self):
        profile = WEATHER_PROFILES[WeatherType.FOG]
        distance = max_distance_for_status(profile, LinkStatus.EXCELLENT, 0.1, 15.0, tol=1e-4)

        assert 1.7 < distance < 1.8
        assert evaluate_link(profile, distance).status == LinkStatus.EXCELLENT
        assert evaluate_link(profile, distance + 1e-3).status != LinkStatus.EXCELLENT

    def test_unreachable_status(self):
        profile = WEATHER_PROFILES[WeatherType.FOG]
        assert max_distance_for_status(profile, LinkStatus.GOOD, 5.0, 15.0) is None

    def test_poor_always_met(self):
        profile = WEATHER_PROFILES[WeatherType.FOG]
        assert max_distance_for_status(profile, "POOR", 0.0, 10.0) == 10.0

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            max_distance_for_status(WEATHER_PROFILES[WeatherType.FOG], LinkStatus.GOOD, 5.0, 1.0)


class TestLinkBudgetEstimator:
    """Test cases for LinkBudgetEstimator."""

    def test_estimator_initialization(self):
        estimator = LinkBudgetEstimator("fog", 1.5)

        assert estimator.weather_type == WeatherType.FOG
        assert estimator.weather_profile.attenuation_coefficient == 25.5
        assert estimator.config == DEFAULT_LINK_CONFIG

    def test_run_matches_evaluate_link(self):
        stats = LinkBudgetEstimator(WeatherType.RAIN, 2.0).run()
        assert isinstance(stats, LinkStats)
        assert stats == evaluate_link(WEATHER_PROFILES[WeatherType.RAIN], 2.0)

    def test_custom_profile(self):
        profile = WeatherProfile(attenuation_coefficient=5.0, label="Drizzle")
        estimator = LinkBudgetEstimator(profile, 1.0)
        assert estimator.weather_type is None
        assert estimator.run().total_attenuation_db == pytest.approx(5.0 + 10 * np.log10(2.0))

    def test_estimator_validation(self):
        with pytest.raises(ValueError, match="Link distance"):
            LinkBudgetEstimator("clear", -1.0)
        with pytest.raises(ValueError, match="Unknown weather"):
            LinkBudgetEstimator("snow", 1.0)

    def test_link_budget_analysis(self):
        estimator = LinkBudgetEstimator("fog", 1.5)
        stats = estimator.run()
        budget = estimator.analyze_link_budget(stats)

        assert budget['weather_loss_db'] == pytest.approx(38.25)
        assert budget['weather_loss_db'] + budget['geometric_loss_db'] == pytest.approx(budget['total_loss_db'])
        assert budget['link_margin_db'] == pytest.approx(stats.received_power_dbm + 50.0)

    def test_link_margin_can_be_negative(self):
        """The margin is not clamped like the SNR."""
        estimator = LinkBudgetEstimator("fog", 10.0)
        stats = estimator.run()
        assert estimator.analyze_link_budget(stats)['link_margin_db'] < 0
        assert stats.snr_db == 0.0

    def test_summary_and_save(self):
        estimator = LinkBudgetEstimator("haze", 4.0)
        stats = estimator.run()
        summary = estimator.get_link_summary(stats)

        assert summary['weather']['condition'] == "HAZE"
        assert summary['results']['distance_km'] == 4.0
        assert len(summary['channels']) == 16

        with tempfile.TemporaryDirectory() as tmpdir:
            summary_file = estimator.save_results(stats, Path(tmpdir) / "out")
            with open(summary_file) as f:
                assert json.load(f)['results'] == stats.to_dict()
            assert LinkConfig.load(Path(tmpdir) / "out" / "config.json") == estimator.config
