import unittest

from src.automation.cooldowns import CooldownTracker
from src.automation.dispatcher import ActionDispatcher
from src.models import Slot, SlotGrid, SlotType
from tests.fakes import FakeClock, RecordingActuator


class ActionDispatcherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.actuator = RecordingActuator()
        self.tracker = CooldownTracker()
        self.grid = SlotGrid().with_slot(2, 3, Slot(SlotType.MP_RESTORER, threshold=60))
        self.dispatcher = ActionDispatcher(
            self.actuator, self.tracker, lambda: self.grid, self.clock
        )

    def test_trigger_sends_and_records(self) -> None:
        position = self.dispatcher.trigger(SlotType.MP_RESTORER, 40)
        self.assertEqual(position, (2, 3))
        self.assertEqual(self.actuator.commands, [("slot", 2, 3)])
        self.assertEqual(self.tracker.last_used(2, 3), self.clock.now)

    def test_probe_without_send_leaves_no_trace(self) -> None:
        position = self.dispatcher.trigger(SlotType.MP_RESTORER, 40, send=False)
        self.assertEqual(position, (2, 3))
        self.assertEqual(self.actuator.commands, [])
        self.assertTrue(self.tracker.is_free(2, 3))

    def test_no_match_sends_nothing(self) -> None:
        self.grid = self.grid.with_slot(2, 3, Slot(SlotType.MP_RESTORER, enabled=False))
        self.assertIsNone(self.dispatcher.trigger(SlotType.MP_RESTORER, 40))
        self.assertEqual(self.actuator.commands, [])
        self.assertEqual(self.tracker.active_count(), 0)

    def test_same_slot_not_reselected_while_cooling(self) -> None:
        self.assertEqual(self.dispatcher.trigger(SlotType.MP_RESTORER, 40), (2, 3))
        self.assertIsNone(self.dispatcher.trigger(SlotType.MP_RESTORER, 40))
        self.assertEqual(len(self.actuator.commands), 1)


if __name__ == "__main__":
    unittest.main()
