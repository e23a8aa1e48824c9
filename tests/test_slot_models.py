import unittest

from src.models import (
    BAR_COUNT,
    SLOTS_PER_BAR,
    Slot,
    SlotBar,
    SlotGrid,
    SlotType,
    TargetMarker,
)


class SlotModelTests(unittest.TestCase):
    def test_slot_type_parse(self) -> None:
        self.assertEqual(SlotType.parse("MpRestorer"), SlotType.MP_RESTORER)
        self.assertEqual(SlotType.parse("mp_restorer"), SlotType.MP_RESTORER)
        self.assertEqual(SlotType.parse("bogus"), SlotType.UNUSED)
        self.assertEqual(SlotType.parse(None), SlotType.UNUSED)

    def test_slot_type_labels(self) -> None:
        self.assertEqual(str(SlotType.MP_RESTORER), "mp restorer")
        self.assertEqual(SlotType.FLYING.label, "fly")
        self.assertEqual(SlotType.CHAT_MESSAGE.label, "??none??")

    def test_slot_defaults(self) -> None:
        slot = Slot()
        self.assertEqual(slot.slot_type, SlotType.UNUSED)
        self.assertTrue(slot.enabled)
        self.assertEqual(slot.effective_cooldown_ms(), 100)
        self.assertEqual(slot.effective_threshold(), 100)

    def test_fractional_cooldown_uses_default(self) -> None:
        self.assertEqual(Slot(cooldown=0.5).effective_cooldown_ms(), 100)
        self.assertEqual(Slot(cooldown=150.7).effective_cooldown_ms(), 100)
        self.assertEqual(Slot(cooldown=150.0).effective_cooldown_ms(), 150)
        self.assertEqual(Slot(cooldown="2500").effective_cooldown_ms(), 2500)

    def test_negative_threshold_from_config_is_dropped(self) -> None:
        slot = Slot.from_dict({"slot_type": "Pill", "slot_threshold": -3})
        self.assertIsNone(slot.threshold)

    def test_bar_is_padded_and_truncated(self) -> None:
        self.assertEqual(len(SlotBar((Slot(SlotType.PILL),))), SLOTS_PER_BAR)
        self.assertEqual(len(SlotBar(tuple(Slot() for _ in range(12)))), SLOTS_PER_BAR)
        self.assertEqual(len(SlotGrid((SlotBar(),)).bars), BAR_COUNT)

    def test_positions_are_bar_major(self) -> None:
        positions = [(b, s) for b, s, _ in SlotGrid().positions()]
        self.assertEqual(len(positions), BAR_COUNT * SLOTS_PER_BAR)
        self.assertEqual(positions[:2], [(0, 0), (0, 1)])
        self.assertEqual(positions[10], (1, 0))

    def test_first_slot_of_ignores_enablement(self) -> None:
        grid = (
            SlotGrid()
            .with_slot(4, 2, Slot(SlotType.FLYING, enabled=False))
            .with_slot(6, 0, Slot(SlotType.FLYING))
        )
        self.assertEqual(grid.first_slot_of(SlotType.FLYING), (4, 2))
        self.assertIsNone(grid.first_slot_of(SlotType.PICKUP_PET))

    def test_with_slot_leaves_original_untouched(self) -> None:
        grid = SlotGrid()
        changed = grid.with_slot(1, 1, Slot(SlotType.PILL))
        self.assertEqual(grid.slot(1, 1).slot_type, SlotType.UNUSED)
        self.assertEqual(changed.slot(1, 1).slot_type, SlotType.PILL)


class TargetMarkerTests(unittest.TestCase):
    def test_distance_from_center(self) -> None:
        marker = TargetMarker(x=290, y=390, width=20, height=20)
        self.assertAlmostEqual(marker.distance_to((0.0, 0.0)), 500.0)
        self.assertAlmostEqual(marker.distance_to((300.0, 400.0)), 0.0)


if __name__ == "__main__":
    unittest.main()
