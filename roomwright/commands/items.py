from roomwright import report
from roomwright.commands.base import Command, ItemNameCommand
from roomwright.world import CommandKind, Transfer


# ==========================================
# INVENTORY
# ==========================================

class ExamineCommand(Command):
    kind = CommandKind.EXAMINE
    key = 'examineCommand'

    DEFAULTS = {
        'keyword.examineCommand': "examine",
        'keyword.examineCommand.abbrev': "x",
        'keyword.examineCommand.alt': "inventory",
        'message.examineCommand.help': "(examine|x|inventory) [<item name>]",
        'message.examineCommand.inventoryWithItems': "The inventory contains the following items: ",
        'message.examineCommand.inventoryWithoutItems': "The inventory has no items.",
        'message.examineCommand.itemNameNotInInventory': "The inventory has no item with that name.",
        'message.examineCommand.itemNameRepeatedInInventory': "The inventory has several items with that name.",
        'flag.showItemsValues': True,
        'flag.showItemsWeight': True,
    }

    item_name = None

    def parse_arguments(self, words):
        self.item_name = " ".join(words) if words else None
        return True

    def run(self):
        inventory = self.state.inventory
        if inventory.is_empty():
            self._result = self.message('inventoryWithoutItems')
            return False

        if self.item_name is None:
            listing = report.item_listing(
                inventory,
                self.setting('flag.showItemsValues'),
                self.setting('flag.showItemsWeight'),
            )
            self._result = self.message('inventoryWithItems') + "\n" + listing
            return True

        found = self.state.find_in_inventory(self.item_name)
        if not found:
            self._result = self.message('itemNameNotInInventory')
            return False
        if len(found) > 1:
            self._result = self.message('itemNameRepeatedInInventory')
            return False
        self._result = found[0].description
        return True


# ==========================================
# MOVING ITEMS
# ==========================================

class TakeCommand(ItemNameCommand):
    kind = CommandKind.TAKE
    key = 'takeCommand'

    DEFAULTS = {
        'keyword.takeCommand': "take",
        'keyword.takeCommand.abbrev': "t",
        'keyword.takeCommand.alt': "pick",
        'message.takeCommand.help': "(take|t|pick) <item name>",
        'message.takeCommand.success': "It has been taken.",
        'message.takeCommand.itemNameNotInLocation': "There is no item with that name in this location.",
        'message.takeCommand.itemNameRepeatedInLocation': "There are several items with that name in this location.",
        'message.takeCommand.itemNameAlreadyInInventory': "There is another item with that name in the inventory.",
        'message.takeCommand.overWeight': "The item cannot be taken, overweight detected.",
        'message.takeCommand.undoSuccess': "It has returned to this location.",
        'message.takeCommand.undoFailure': "The item cannot return to this location from the inventory.",
        'flag.takeCommand.allowFIFODisambiguationForItemNameRepeatedInLocation': False,
        'flag.takeCommand.allowRepetitionsInInventoryItemNames': False,
        'limit.inventoryCapacity': 10,
    }

    item = None

    def run(self):
        found = self.state.find_in_location(self.item_name)
        if not found:
            self._result = self.message('itemNameNotInLocation')
            return False
        fifo = 'flag.takeCommand.allowFIFODisambiguationForItemNameRepeatedInLocation'
        if len(found) > 1 and not self.setting(fifo):
            self._result = self.message('itemNameRepeatedInLocation')
            return False

        item = found[0]
        repetitions = 'flag.takeCommand.allowRepetitionsInInventoryItemNames'
        if self.state.find_in_inventory(self.item_name) and not self.setting(repetitions):
            self._result = self.message('itemNameAlreadyInInventory')
            return False
        if self.state.inventory_weight() + item.weight > self.setting('limit.inventoryCapacity'):
            self._result = self.message('overWeight')
            return False

        self.state.transfer_item(item, Transfer.LOCATION_TO_INVENTORY)
        self.item = item
        self._result = self.message('success')
        return True

    def revert(self):
        if self.item not in self.state.inventory or self.item in self.state.current_location.items:
            self._result = self.message('undoFailure')
            return False
        self.state.transfer_item(self.item, Transfer.INVENTORY_TO_LOCATION)
        self._result = self.message('undoSuccess')
        return True


class DropCommand(ItemNameCommand):
    kind = CommandKind.DROP
    key = 'dropCommand'

    DEFAULTS = {
        'keyword.dropCommand': "drop",
        'keyword.dropCommand.abbrev': "d",
        'keyword.dropCommand.alt': "unpick",
        'message.dropCommand.help': "(drop|d|unpick) <item name>",
        'message.dropCommand.success': "It has been dropped.",
        'message.dropCommand.itemNameNotInInventory': "There is no item with that name in the inventory.",
        'message.dropCommand.itemNameRepeatedInInventory': "There are several items with that name in the inventory.",
        'message.dropCommand.itemNameAlreadyInLocation': "There is another item with that name in this location.",
        'message.dropCommand.undoSuccess': "It has returned to the inventory.",
        'message.dropCommand.undoFailure': "The item cannot return to the inventory from this location.",
        'flag.dropCommand.allowFIFODisambiguationForItemNameRepeatedInInventory': False,
        'flag.dropCommand.allowRepetitionsInLocationItemNames': False,
    }

    item = None

    def run(self):
        found = self.state.find_in_inventory(self.item_name)
        if not found:
            self._result = self.message('itemNameNotInInventory')
            return False
        fifo = 'flag.dropCommand.allowFIFODisambiguationForItemNameRepeatedInInventory'
        if len(found) > 1 and not self.setting(fifo):
            self._result = self.message('itemNameRepeatedInInventory')
            return False

        item = found[0]
        repetitions = 'flag.dropCommand.allowRepetitionsInLocationItemNames'
        if self.state.find_in_location(self.item_name) and not self.setting(repetitions):
            self._result = self.message('itemNameAlreadyInLocation')
            return False

        self.state.transfer_item(item, Transfer.INVENTORY_TO_LOCATION)
        self.item = item
        self._result = self.message('success')
        return True

    def revert(self):
        if self.item not in self.state.current_location.items or self.item in self.state.inventory:
            self._result = self.message('undoFailure')
            return False
        self.state.transfer_item(self.item, Transfer.LOCATION_TO_INVENTORY)
        self._result = self.message('undoSuccess')
        return True
