import unittest

from roomwright.commands.items import TakeCommand
from roomwright.commands.movement import GoCommand
from roomwright.commands.session import HelpCommand
from roomwright.errors import UnexecutedCommandError, UnparsedCommandError
from roomwright.model import Direction
from roomwright.world import CommandKind, Transfer

from sample_worlds import DOOR, SWORDS, new_engine, new_state, world_path

FIFO = 'flag.takeCommand.allowFIFODisambiguationForItemNameRepeatedInLocation'
REPEAT = 'flag.takeCommand.allowRepetitionsInInventoryItemNames'


class TestLifecycle(unittest.TestCase):
    def setUp(self):
        self.state = new_state(DOOR)

    def test_execute_before_parse(self):
        with self.assertRaises(UnparsedCommandError):
            TakeCommand(self.state).execute()

    def test_undo_and_result_before_execute(self):
        command = TakeCommand(self.state)
        self.assertTrue(command.parse("take key"))
        with self.assertRaises(UnexecutedCommandError):
            command.undo()
        with self.assertRaises(UnexecutedCommandError):
            command.result

    def test_result_after_execute(self):
        command = TakeCommand(self.state)
        command.parse("take key")
        self.assertTrue(command.execute())
        self.assertEqual(command.result, "It has been taken.")

    def test_prototypes_stay_unparsed(self):
        state, engine = new_engine(DOOR)
        command = engine.parser.parse("take key")
        self.assertIsInstance(command, TakeCommand)
        self.assertNotIn(command, engine.parser.prototypes)
        for prototype in engine.parser.prototypes:
            with self.assertRaises(UnparsedCommandError):
                prototype.execute()


class TestParser(unittest.TestCase):
    def test_keywords_and_abbreviations(self):
        state, engine = new_engine(DOOR)
        parse = engine.parser.parse
        self.assertIsInstance(parse("GO NORTH"), GoCommand)
        self.assertIsInstance(parse("g n"), GoCommand)
        self.assertIsInstance(parse("move n ignored"), GoCommand)
        self.assertIsInstance(parse("info"), HelpCommand)
        self.assertEqual(parse("x").kind, CommandKind.EXAMINE)
        self.assertEqual(parse("lo saved.json").kind, CommandKind.LOAD)

    def test_unknown_lines(self):
        state, engine = new_engine(DOOR)
        for line in ("", "   ", "xyzzy", "go", "go sideways", "take", "quit now", "open with key"):
            self.assertIsNone(engine.parser.parse(line), line)

    def test_earlier_prototype_wins_a_collision(self):
        state, engine = new_engine(SWORDS, {'keyword.takeCommand.alt': "drop"})
        self.assertEqual(engine.parser.parse("drop sword").kind, CommandKind.TAKE)

    def test_configured_keyword_replaces_the_default(self):
        state, engine = new_engine(SWORDS, {'keyword.takeCommand': "grab"})
        self.assertEqual(engine.parser.parse("grab sword").kind, CommandKind.TAKE)
        self.assertIsNone(engine.parser.parse("take sword"))
        self.assertEqual(engine.parser.parse("pick sword").kind, CommandKind.TAKE)

    def test_report_help_lists_every_command_in_order(self):
        state, engine = new_engine(DOOR)
        lines = engine.parser.report_help().split("\n")
        self.assertEqual(len(lines), 12)
        self.assertEqual(lines[0], "help|info|about")
        self.assertEqual(lines[1], "(go|g|move) <direction>")
        self.assertEqual(lines[-1], "(load|lo|continue) <file path>")


class TestLockedDoor(unittest.TestCase):
    """Open a locked door with the key bound to it, then walk through."""

    def setUp(self):
        self.state, self.engine = new_engine(DOOR)
        self.door = self.state.world.obstacles["door"]

    def test_scenario(self):
        blocked = self.engine.process("go north")
        self.assertEqual(blocked.result, "The door is locked.")
        self.assertEqual(self.state.current_location_id, "l1")

        self.assertEqual(self.engine.process("open north").result, "Unlock Fail")
        self.assertTrue(self.door.status)

        self.assertEqual(self.engine.process("take key").result, "It has been taken.")
        self.assertEqual(self.engine.process("open north with key").result, "Obstacle Unlocked")
        self.assertFalse(self.door.status)

        moved = self.engine.process("go north")
        self.assertEqual(self.state.current_location_id, "l2")
        self.assertTrue(moved.result.startswith("Second\nThe second room."))
        self.assertIn("SOUTH [CLEAR]", moved.result)

    def test_key_must_be_carried(self):
        self.assertEqual(self.engine.process("open n with key").result, "Unlock Fail")
        self.assertTrue(self.door.status)

    def test_close_and_undo(self):
        self.engine.process("take key")
        self.engine.process("unlock NORTH with key")
        self.assertEqual(self.engine.process("close north").result, "Lock Fail")
        self.assertEqual(self.engine.process("lock north with key").result, "Obstacle Locked")
        self.assertTrue(self.door.status)

        self.assertEqual(self.engine.process("undo").result, "Obstacle Unlocked")
        self.assertFalse(self.door.status)

    def test_undo_open(self):
        self.engine.process("take key")
        self.engine.process("open north with key")
        self.assertEqual(self.engine.process("undo").result, "Obstacle Locked")
        self.assertTrue(self.door.status)

    def test_no_obstacle_there(self):
        self.assertEqual(self.engine.process("open south").result, "Unlock Fail")

    def test_look(self):
        self.assertEqual(
            self.engine.process("look").result,
            "First\nThe first room.\n\n"
            "This location contains the following items: \nkey [Value(1) Weight(1)]\n"
            "The available directions from this location are: \nNORTH [CLOSED]",
        )


class TestLinkedObstacles(unittest.TestCase):
    def test_closing_the_hatch_opens_the_door(self):
        with open(world_path("keep.txt"), encoding="utf-8") as f:
            state, engine = new_engine(f.read())
        hatch = state.world.obstacles["hatch"]
        door = state.world.obstacles["door"]

        engine.process("go east")
        self.assertEqual(engine.process("close down").result, "Obstacle Locked")
        self.assertTrue(hatch.status)
        self.assertFalse(door.status)

        self.assertEqual(engine.process("go d").result, "The hatch is shut.")


class TestMovement(unittest.TestCase):
    def test_no_way(self):
        state, engine = new_engine(DOOR)
        command = engine.process("go west")
        self.assertEqual(command.result, "There is no way in that direction.")
        self.assertEqual(state.total_executions(), 0)

    def test_undo_walks_back(self):
        state, engine = new_engine(DOOR)
        state.world.obstacles["door"].toggle()
        engine.process("go north")
        back = engine.process("undo")
        self.assertEqual(state.current_location_id, "l1")
        self.assertTrue(back.result.startswith("First\nThe first room."))


class TestTakeAndDrop(unittest.TestCase):
    def test_repeated_name_needs_fifo_flag(self):
        state, engine = new_engine(SWORDS)
        self.assertEqual(engine.process("take sword").result,
                         "There are several items with that name in this location.")
        self.assertTrue(state.inventory.is_empty())

        state, engine = new_engine(SWORDS, {FIFO: True})
        self.assertEqual(engine.process("take sword").result, "It has been taken.")
        self.assertEqual(list(state.inventory), [state.world.items["rusty"]])

    def test_same_name_in_inventory(self):
        state, engine = new_engine(SWORDS, {FIFO: True})
        engine.process("take sword")
        self.assertEqual(engine.process("take sword").result,
                         "There is another item with that name in the inventory.")

        state, engine = new_engine(SWORDS, {FIFO: True, REPEAT: "true"})
        engine.process("take sword")
        engine.process("take sword")
        self.assertEqual(len(state.inventory), 2)

    def test_overweight(self):
        state, engine = new_engine(SWORDS, {FIFO: True, REPEAT: True, 'limit.inventoryCapacity': 3})
        engine.process("take sword")
        self.assertEqual(engine.process("take sword").result,
                         "The item cannot be taken, overweight detected.")

    def test_missing_item(self):
        state, engine = new_engine(SWORDS)
        self.assertEqual(engine.process("take axe").result,
                         "There is no item with that name in this location.")
        self.assertEqual(engine.process("drop axe").result,
                         "There is no item with that name in the inventory.")

    def test_drop_and_undo(self):
        state, engine = new_engine(DOOR)
        key = state.world.items["key"]
        engine.process("take key")
        self.assertEqual(engine.process("drop key").result, "It has been dropped.")
        self.assertIn(key, state.current_location.items)

        self.assertEqual(engine.process("undo").result, "It has returned to the inventory.")
        self.assertIn(key, state.inventory)

    def test_undo_take(self):
        state, engine = new_engine(DOOR)
        engine.process("take key")
        self.assertEqual(engine.process("undo").result, "It has returned to this location.")
        self.assertTrue(state.inventory.is_empty())

    def test_message_override_ignores_key_case(self):
        state, engine = new_engine(DOOR, {'MESSAGE.TAKECOMMAND.SUCCESS': "Got it."})
        self.assertEqual(engine.process("take key").result, "Got it.")


class TestExamine(unittest.TestCase):
    def setUp(self):
        self.state, self.engine = new_engine(DOOR)

    def test_empty_inventory(self):
        command = self.engine.process("inventory")
        self.assertEqual(command.result, "The inventory has no items.")
        self.assertEqual(self.state.total_executions(), 0)

    def test_whole_inventory_and_one_item(self):
        self.engine.process("take key")
        self.assertEqual(self.engine.process("examine").result,
                         "The inventory contains the following items: \nkey [Value(1) Weight(1)]")
        self.assertEqual(self.engine.process("x key").result, "A small key.")
        self.assertEqual(self.engine.process("x lamp").result,
                         "The inventory has no item with that name.")

    def test_listing_flags(self):
        state, engine = new_engine(DOOR, {'flag.showItemsValues': False})
        engine.process("take key")
        self.assertEqual(engine.process("examine").result,
                         "The inventory contains the following items: \nkey [Weight(1)]")


class TestUndo(unittest.TestCase):
    def test_nothing_to_undo(self):
        state, engine = new_engine(DOOR)
        self.assertEqual(engine.process("undo").result, "There is no command that can be undone.")

    def test_undo_is_not_recorded_and_consumes_the_entry(self):
        state, engine = new_engine(DOOR)
        engine.process("take key")
        engine.process("undo")
        self.assertTrue(state.history.is_empty())
        self.assertEqual(engine.process("u").result, "There is no command that can be undone.")
        self.assertEqual(state.executions(CommandKind.UNDO), 0)

    def test_failed_undo_still_forgets_the_command(self):
        state, engine = new_engine(DOOR)
        engine.process("take key")
        state.transfer_item(state.world.items["key"], Transfer.INVENTORY_TO_LOCATION)

        self.assertEqual(engine.process("undo").result,
                         "The item cannot return to this location from the inventory.")
        self.assertTrue(state.history.is_empty())

    def test_history_size_comes_from_config(self):
        state, engine = new_engine(DOOR, {'limit.commandHistorySize': 2})
        for _ in range(3):
            engine.process("look")
        self.assertEqual(len(state.history), 2)
        self.assertEqual(state.executions(CommandKind.LOOK), 3)

    def test_generic_undo(self):
        state, engine = new_engine(DOOR)
        engine.process("look")
        self.assertEqual(engine.process("undo").result, "Undo success: Look")


class TestSessionCommands(unittest.TestCase):
    def test_quit(self):
        state, engine = new_engine(DOOR)
        engine.process("take key")
        command = engine.process("QUIT")
        self.assertEqual(command.result, "Player score: 1\nGAME OVER")
        self.assertTrue(state.is_ended())

    def test_help(self):
        with open(world_path("keep.txt"), encoding="utf-8") as f:
            state, engine = new_engine(f.read())
        engine.process("look")
        text = engine.process("help").result

        self.assertTrue(text.startswith("These are the available player commands:\nhelp|info|about\n"))
        self.assertIn("\n\nSpecial Help: \nKeys open doors.", text)
        self.assertIn("\n\nCommand Statistics: \n", text)
        self.assertIn("LookCommand: \n\tExecutions: 1\n\tPercentage: 100", text)
        self.assertTrue(text.endswith("Active Game Configuration:\nNo specific configuration file given."))

    def test_help_sections_can_be_hidden(self):
        state, engine = new_engine(DOOR, {
            'flag.showHistoryStatistics': False,
            'flag.showActiveConfiguration': "false",
        })
        text = engine.process("about").result
        self.assertNotIn("Command Statistics", text)
        self.assertNotIn("Active Game Configuration", text)
        self.assertTrue(text.endswith("(load|lo|continue) <file path>"))


class TestConnectionsListing(unittest.TestCase):
    def test_state_flag(self):
        state, engine = new_engine(DOOR, {'flag.showConnectionsState': False})
        result = engine.process("l").result
        self.assertTrue(result.endswith("are: \nNORTH"))

    def test_connection_order_follows_directions(self):
        with open(world_path("keep.txt"), encoding="utf-8") as f:
            state, engine = new_engine(f.read())
        result = engine.process("look").result
        self.assertTrue(result.endswith("NORTH [CLOSED]\nEAST [CLEAR]\nSOUTH [CLEAR]"))
        self.assertEqual(state.current_location.obstacle(Direction.NORTH).id, "door")


if __name__ == '__main__':
    unittest.main()
