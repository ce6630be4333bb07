import json
import os
import tempfile
import unittest

from roomwright.config import GameConfig
from roomwright.errors import SnapshotError
from roomwright.main import open_world
from roomwright.persistence import load_game, restore, save_game, snapshot
from roomwright.resolver import load_definition
from roomwright.world import CommandKind, WorldState

from sample_worlds import DOOR, describe, new_engine, world_path


class TestSnapshot(unittest.TestCase):
    def setUp(self):
        self.state = WorldState(load_definition(world_path("keep.txt")))

    def test_round_trip_keeps_the_graph(self):
        copy = restore(snapshot(self.state))
        self.assertEqual(describe(copy.world), describe(self.state.world))

    def test_links_point_at_restored_entities(self):
        copy = restore(snapshot(self.state))
        door = copy.world.obstacles["door"]
        hatch = copy.world.obstacles["hatch"]
        self.assertIs(door.bounded_items[0], copy.world.items["key"])
        self.assertIs(hatch.bounded_obstacles[0], door)
        self.assertIs(copy.world.location("courtyard").obstacle(door.direction), door)

    def test_progress_is_kept(self):
        crown = self.state.world.items["crown"]
        self.state.current_location.items.remove(self.state.world.items["key"])
        self.state.inventory.add(self.state.world.items["key"])
        self.state.add_event("Something happened.")
        self.state.end()
        self.state.record_execution(type("Fake", (), {"kind": CommandKind.TAKE})())

        copy = restore(json.loads(json.dumps(snapshot(self.state))))
        self.assertEqual([item.id for item in copy.inventory], ["key"])
        self.assertTrue(copy.is_ended())
        self.assertEqual(copy.report_events(), "Something happened.")
        self.assertEqual(copy.executions(CommandKind.TAKE), 1)
        self.assertEqual(copy.total_executions(), 1)
        self.assertNotIn(crown, copy.world.items.values())

    def test_broken_snapshots(self):
        with self.assertRaises(SnapshotError):
            restore({'version': 1})
        with self.assertRaises(SnapshotError):
            restore({'version': 99})
        data = snapshot(self.state)
        data['current_location'] = "moon"
        with self.assertRaises(SnapshotError):
            restore(data)


class TestFiles(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "game.json")

    def tearDown(self):
        self.tmp.cleanup()

    def test_save_and_load(self):
        state = WorldState(load_definition(world_path("keep.txt")))
        save_game(state, self.path)
        loaded = load_game(self.path)
        self.assertEqual(describe(loaded.world), describe(state.world))
        self.assertEqual(loaded.current_location_id, "courtyard")

    def test_load_rejects_other_files(self):
        with open(self.path, "w") as f:
            f.write("not json at all")
        with self.assertRaises(SnapshotError):
            load_game(self.path)
        with open(self.path, "w") as f:
            f.write("[1, 2, 3]")
        with self.assertRaises(SnapshotError):
            load_game(self.path)

    def test_save_and_load_commands(self):
        state, engine = new_engine(DOOR)
        key = state.world.items["key"]
        engine.process("take key")
        self.assertEqual(engine.process(f"save {self.path}").result, "Game saved")
        engine.process("drop key")
        self.assertTrue(state.inventory.is_empty())

        self.assertEqual(engine.process(f"load {self.path}").result, "Game loaded")
        self.assertEqual([item.id for item in state.inventory], ["key"])
        self.assertNotIn(key, state.inventory)
        self.assertEqual(len(state.history), 1)
        self.assertEqual(state.history.pop().kind, CommandKind.LOAD)

    def test_io_failures_are_failed_commands(self):
        state, engine = new_engine(DOOR)
        missing = os.path.join(self.tmp.name, "nowhere", "game.json")
        with self.assertLogs("roomwright.commands.session", level="WARNING"):
            self.assertEqual(engine.process(f"save {missing}").result, "Unable to save the game")
        with self.assertLogs("roomwright.commands.session", level="WARNING"):
            self.assertEqual(engine.process(f"load {missing}").result, "Unable to load the game")
        self.assertFalse(state.is_ended())

    def test_saved_game_opens_like_a_definition(self):
        state = WorldState(load_definition(world_path("keep.txt")))
        state.current_location_id = "cellar"
        save_game(state, self.path)

        opened = open_world(self.path, GameConfig())
        self.assertEqual(opened.current_location_id, "cellar")


if __name__ == '__main__':
    unittest.main()
