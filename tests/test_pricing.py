"""Unit tests for the tariff engine."""

import pytest

from fare_estimator.domain.entities import InvalidVehicleClass
from fare_estimator.domain.enums import AddOn, VehicleClass
from fare_estimator.domain.pricing import (
    PerKilometerTariff,
    SurchargedTariff,
    TariffEngine,
    estimate_fare,
    is_surcharged,
    parse_vehicle_class,
    round_half_up,
)


class TestTariffStrategies:
    def test_per_kilometer_tariff(self):
        strategy = PerKilometerTariff(rate_per_km=2.0)
        assert strategy.calculate(100.0, 10.0, 1.0) == 210.0  # 10 + 100*2

    def test_detour_factor_inflates_distance(self):
        strategy = PerKilometerTariff(rate_per_km=2.0)
        assert strategy.calculate(100.0, 10.0, 1.5) == 310.0  # 10 + 150*2

    def test_surcharged_tariff_adds_flat_amount(self):
        strategy = SurchargedTariff(PerKilometerTariff(2.0), surcharge=5.0)
        assert strategy.calculate(100.0, 10.0, 1.0) == 215.0


class TestEstimateFare:
    @pytest.mark.parametrize(
        "vehicle, rate",
        [("Berline", 1.8), ("Hybride", 2.0), ("Van", 2.3)],
    )
    def test_formula(self, vehicle, rate):
        expected = round(10 + 100 * 1.15 * rate, 2)
        assert estimate_fare(100, vehicle, "none") == pytest.approx(expected)

    def test_berline_100_km(self):
        assert estimate_fare(100, VehicleClass.BERLINE) == pytest.approx(217.0)

    def test_zero_distance_is_base_fare(self):
        assert estimate_fare(0, "Van", "none") == 10.0

    def test_rounded_to_two_decimals(self):
        price = estimate_fare(123.4567, "Hybride", "none")
        assert price == round(price, 2)

    def test_half_cent_rounds_up(self):
        engine = TariffEngine(base_fare=0.125, detour_factor=1.0, rates={VehicleClass.BERLINE: 1.0})
        assert engine.estimate_fare(0, "Berline") == 0.13

    def test_invalid_vehicle_class(self):
        with pytest.raises(InvalidVehicleClass):
            estimate_fare(100, "Truck", "none")

    def test_vehicle_class_is_case_sensitive(self):
        with pytest.raises(InvalidVehicleClass):
            estimate_fare(100, "berline", "none")

    @pytest.mark.parametrize("add_on", ["baby-seat", "booster-seat"])
    @pytest.mark.parametrize("vehicle", ["Berline", "Hybride", "Van"])
    @pytest.mark.parametrize("distance", [0.0, 12.5, 391.5, 1500.0])
    def test_child_seat_surcharge(self, add_on, vehicle, distance):
        with_seat = estimate_fare(distance, vehicle, add_on)
        without = estimate_fare(distance, vehicle, "none")
        assert with_seat - without == pytest.approx(5.0)

    def test_unknown_add_on_has_no_surcharge(self):
        assert estimate_fare(50, "Van", "champagne") == estimate_fare(50, "Van", "none")

    @pytest.mark.parametrize("vehicle", list(VehicleClass))
    def test_strictly_increasing_in_distance(self, vehicle):
        prices = [estimate_fare(d, vehicle, AddOn.NONE) for d in range(0, 2000, 7)]
        assert all(a < b for a, b in zip(prices, prices[1:]))

    def test_van_costs_more_than_berline(self):
        assert estimate_fare(200, "Van") > estimate_fare(200, "Hybride") > estimate_fare(200, "Berline")


class TestTariffEngine:
    def test_custom_settings(self):
        engine = TariffEngine(base_fare=0.0, detour_factor=1.0, add_on_surcharge=3.0)
        assert engine.estimate_fare(10, "Berline", "baby-seat") == pytest.approx(21.0)

    def test_rate_table_restricts_classes(self):
        engine = TariffEngine(rates={VehicleClass.BERLINE: 1.0})
        with pytest.raises(InvalidVehicleClass):
            engine.estimate_fare(10, "Van")

    @pytest.mark.parametrize(
        "amount, expected",
        [(0.125, 0.13), (0.005, 0.01), (-0.125, -0.13), (2.675, 2.67), (817.4, 817.4)],
    )
    def test_round_half_up(self, amount, expected):
        assert round_half_up(amount) == expected

    def test_parse_vehicle_class(self):
        assert parse_vehicle_class("Hybride") is VehicleClass.HYBRIDE
        with pytest.raises(InvalidVehicleClass):
            parse_vehicle_class(None)

    def test_is_surcharged(self):
        assert is_surcharged("baby-seat")
        assert is_surcharged(AddOn.BOOSTER_SEAT)
        assert not is_surcharged("none")
        assert not is_surcharged(None)
