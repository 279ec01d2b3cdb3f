import pytest
from pydantic import ValidationError
from turtle_hero.components import Inventory, Item, ItemStack, ItemType

@pytest.fixture
def mushroom():
    return Item(id="mushroom_heal", name="Healing Mushroom", health_restore=20)

@pytest.fixture
def sword():
    return Item(id="shell_sword", type=ItemType.WEAPON, strength_bonus=2, max_stack=1)

def test_add_and_count(inventory, mushroom):
    assert inventory.add_item(mushroom, 3)

    assert inventory.get_item_count("mushroom_heal") == 3
    assert inventory.has_item("mushroom_heal")
    assert inventory.has_item("mushroom_heal", 3)
    assert not inventory.has_item("mushroom_heal", 4)
    assert inventory.used_slots == 1

def test_stack_grows_in_place(inventory, mushroom):
    inventory.add_item(mushroom, 50)
    inventory.add_item(mushroom, 49)

    assert inventory.used_slots == 1
    assert inventory.get_item_stack("mushroom_heal").quantity == 99
    assert inventory.get_item_stack("mushroom_heal").is_full

def test_full_stack_overflows_to_new_slot(inventory, mushroom):
    inventory.add_item(mushroom, 99)

    assert inventory.add_item(mushroom, 1)
    assert inventory.used_slots == 2
    assert inventory.get_item_stack("mushroom_heal_1").quantity == 1
    assert inventory.get_item_count("mushroom_heal") == 100

def test_stack_shares_item_reference(inventory, mushroom):
    inventory.add_item(mushroom)

    assert inventory.get_item_stack("mushroom_heal").item is mushroom

def test_no_partial_add(inventory, mushroom):
    inventory.add_item(mushroom, 90)

    # 20 does not fit in the first stack; it goes whole into a new one
    assert inventory.add_item(mushroom, 20)
    assert inventory.get_item_stack("mushroom_heal").quantity == 90
    assert inventory.get_item_stack("mushroom_heal_1").quantity == 20

def test_quantity_over_max_stack_rejected(inventory, mushroom):
    assert not inventory.add_item(mushroom, 100)
    assert inventory.used_slots == 0

def test_invalid_add(inventory, mushroom):
    assert not inventory.add_item(None)
    assert not inventory.add_item(mushroom, 0)
    assert not inventory.add_item(mushroom, -1)
    assert inventory.used_slots == 0

def test_thirteenth_item_type_rejected(inventory):
    for i in range(Inventory.MAX_SLOTS):
        assert inventory.add_item(Item(id=f"item_{i}"))

    assert not inventory.has_free_slots
    assert not inventory.add_item(Item(id="item_12"))
    assert inventory.used_slots == 12

def test_full_inventory_still_grows_existing_stack(inventory, mushroom):
    inventory.add_item(mushroom)
    for i in range(Inventory.MAX_SLOTS - 1):
        inventory.add_item(Item(id=f"item_{i}"))

    assert inventory.add_item(mushroom, 5)
    assert inventory.get_item_count("mushroom_heal") == 6

def test_equipment_does_not_stack(inventory, sword):
    inventory.add_item(sword)
    inventory.add_item(sword)

    assert inventory.used_slots == 2
    assert inventory.get_item_stack("shell_sword_1") is not None
    assert inventory.get_item_count("shell_sword") == 2

def test_remove(inventory, mushroom):
    inventory.add_item(mushroom, 5)

    assert inventory.remove_item("mushroom_heal", 2)
    assert inventory.get_item_count("mushroom_heal") == 3

def test_remove_last_removes_stack(inventory, mushroom):
    inventory.add_item(mushroom, 2)

    assert inventory.remove_item("mushroom_heal", 2)
    assert inventory.get_item_stack("mushroom_heal") is None
    assert inventory.used_slots == 0

def test_remove_too_many_fails(inventory, mushroom):
    inventory.add_item(mushroom, 2)

    assert not inventory.remove_item("mushroom_heal", 3)
    assert inventory.get_item_count("mushroom_heal") == 2

def test_remove_invalid(inventory, mushroom):
    inventory.add_item(mushroom, 2)

    assert not inventory.remove_item("mushroom_heal", 0)
    assert not inventory.remove_item("mushroom_heal", -1)
    assert not inventory.remove_item("missing")

def test_remove_drains_overflow_first(inventory, mushroom):
    inventory.add_item(mushroom, 99)
    inventory.add_item(mushroom, 3)

    assert inventory.remove_item("mushroom_heal", 5)

    assert inventory.get_item_stack("mushroom_heal_1") is None
    assert inventory.get_item_stack("mushroom_heal").quantity == 97

def test_new_overflow_key_reuses_gaps(inventory, sword):
    for _ in range(3):
        inventory.add_item(sword)
    del inventory.items["shell_sword_1"]

    inventory.add_item(sword)

    assert set(inventory.items) == {"shell_sword", "shell_sword_1", "shell_sword_2"}

def test_id_matching_overflow_key_gets_own_stack(inventory, sword):
    # An item whose id equals another item's overflow key
    lookalike = Item(id="shell_sword_1", type=ItemType.QUEST)
    inventory.add_item(sword)
    inventory.add_item(sword)

    assert inventory.add_item(lookalike)

    assert inventory.used_slots == 3
    assert inventory.get_item_count("shell_sword") == 2
    assert inventory.get_item_count("shell_sword_1") == 1
    assert inventory.get_item_stack("shell_sword_1").item.id == "shell_sword"
    assert inventory.get_item_stack("shell_sword_1_1").item is lookalike

def test_iter_and_clear(inventory, mushroom, sword):
    inventory.add_item(mushroom, 2)
    inventory.add_item(sword)

    assert dict(inventory.iter_stacks()).keys() == {"mushroom_heal", "shell_sword"}

    inventory.clear()
    assert inventory.used_slots == 0

def test_item_stack(mushroom):
    stack = ItemStack(item=mushroom, quantity=98)

    assert stack.can_add(1)
    assert not stack.can_add(2)
    assert not stack.add(2)
    assert stack.add(1)
    assert stack.is_full
    assert not stack.remove(100)
    assert stack.remove(99)
    assert stack.is_empty

def test_item_is_immutable(mushroom):
    with pytest.raises(ValidationError):
        mushroom.health_restore = 100

def test_item_max_stack_must_be_positive():
    with pytest.raises(ValidationError):
        Item(id="bad", max_stack=0)

def test_is_equipment(mushroom, sword):
    assert sword.is_equipment
    assert not mushroom.is_equipment
