# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for sector profiles and the sector weightings store."""

from __future__ import annotations

import logging

import pytest

from fire_risk_survey.data.models import Dimension, SectorWeighting, SectorWeights
from fire_risk_survey.data.sectors import (
    AVAILABLE_SECTORS,
    GENERAL_INDUSTRIAL,
    SECTOR_CATALOGUE,
    SECTOR_PROFILES,
    get_sector_profile,
    get_sector_weights,
)
from fire_risk_survey.data.weightings import (
    HOME_ENV_VAR,
    WEIGHTINGS_FILE_NAME,
    SectorWeightingStore,
    validate_admin_weight,
)


class TestSectorProfiles:
    def test_built_in_profiles(self):
        assert len(SECTOR_PROFILES) == 7
        assert "Food & Beverage" in AVAILABLE_SECTORS
        assert "General Industrial" in AVAILABLE_SECTORS

    def test_profile_weights_sum_to_one(self):
        for profile in SECTOR_PROFILES.values():
            assert profile.weights.total == pytest.approx(1.0), profile.name

    def test_profiles_have_narrative(self):
        for profile in SECTOR_PROFILES.values():
            assert profile.description
            assert profile.emphasis

    def test_unknown_profile_is_none(self):
        assert get_sector_profile("Underwater Basket Weaving") is None

    def test_unknown_weights_fall_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            weights = get_sector_weights("Underwater Basket Weaving")
        assert weights == GENERAL_INDUSTRIAL.weights
        assert "falling back" in caplog.text

    def test_catalogue_size(self):
        assert len(SECTOR_CATALOGUE) == 38


class TestValidateAdminWeight:
    @pytest.mark.parametrize("value", [1, 3, 5])
    def test_valid(self, value):
        assert validate_admin_weight(value) == value

    @pytest.mark.parametrize("value", [0, 6, 2.5, True, "3"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            validate_admin_weight(value)


class TestSectorWeightingStore:
    def test_default_rows(self, store: SectorWeightingStore):
        expected = set(SECTOR_CATALOGUE) | set(SECTOR_PROFILES) | {"Default"}
        assert len(store) == len(expected)
        assert store.get("Default").is_custom
        assert store.get("Default").weights == SectorWeights.uniform(3)
        assert not store.get("Hotel").is_custom
        assert store.get("Chemical / ATEX").is_custom

    def test_rows_sorted(self, store: SectorWeightingStore):
        names = [r.sector_name for r in store.rows()]
        assert names == sorted(names)

    def test_resolve_custom_row(self, store: SectorWeightingStore):
        assert store.resolve("Food & Beverage") == SECTOR_PROFILES["Food & Beverage"].weights

    def test_resolve_non_custom_uses_default(self, store: SectorWeightingStore):
        store.set_weights("Default", SectorWeights.uniform(2))
        assert store.resolve("Hotel") == SectorWeights.uniform(2)

    def test_resolve_unknown_uses_default(self, store: SectorWeightingStore):
        assert store.resolve("Nowhere") == SectorWeights.uniform(3)

    def test_resolve_without_default_row(self, caplog):
        store = SectorWeightingStore([SectorWeighting(sector_name="Hotel")])
        with caplog.at_level(logging.WARNING):
            weights = store.resolve("Hotel")
        assert weights == GENERAL_INDUSTRIAL.weights
        assert "General Industrial" in caplog.text

    def test_set_weights_marks_custom(self, store: SectorWeightingStore):
        before = store.get("Hotel").updated_at
        row = store.set_weights("Hotel", SectorWeights(construction=5))
        assert row.is_custom
        assert row.updated_at >= before
        assert store.resolve("Hotel").construction == 5

    def test_set_weights_creates_unknown_sector(self, store: SectorWeightingStore):
        store.set_weights("Brewery", SectorWeights.uniform(4))
        assert "Brewery" in store

    def test_set_single_weight(self, store: SectorWeightingStore):
        row = store.set_weight("Hotel", Dimension.detection, 5)
        assert row.weights.detection == 5
        assert row.weights.construction == 3
        assert row.is_custom

    def test_set_single_weight_rejects_out_of_range(self, store: SectorWeightingStore):
        with pytest.raises(ValueError):
            store.set_weight("Hotel", Dimension.detection, 9)
        assert not store.get("Hotel").is_custom

    def test_reset(self, store: SectorWeightingStore):
        store.set_weight("Hotel", Dimension.detection, 5)
        row = store.reset("Hotel")
        assert not row.is_custom
        assert row.weights == SectorWeights.uniform(3)

    def test_reset_unknown_raises(self, store: SectorWeightingStore):
        with pytest.raises(KeyError):
            store.reset("Nowhere")

    def test_save_and_load(self, store: SectorWeightingStore, tmp_path):
        store.set_weight("Hotel", Dimension.management, 1)
        path = store.save(tmp_path / "nested" / "weights.json")
        loaded = SectorWeightingStore.load(path)

        assert len(loaded) == len(store)
        assert loaded.get("Hotel").is_custom
        assert loaded.get("Hotel").weights.management == 1

    def test_load_missing_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SectorWeightingStore.load(tmp_path / "missing.json")

    def test_load_or_default(self, tmp_path):
        store = SectorWeightingStore.load_or_default(tmp_path / "missing.json")
        assert "Default" in store

    def test_load_or_default_uses_home_override(self, tmp_path, monkeypatch):
        store = SectorWeightingStore.default()
        store.set_weight("Hotel", Dimension.management, 1)
        store.save(tmp_path / WEIGHTINGS_FILE_NAME)
        monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path))

        loaded = SectorWeightingStore.load_or_default()
        assert loaded.get("Hotel").is_custom
        assert loaded.get("Hotel").weights.management == 1
