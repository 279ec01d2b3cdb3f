import pytest
from turtle_engine.core.config import GameConfig
from turtle_engine.core.rng import SeededRandom
from turtle_hero.battle import BattleEvent, BattleState, BattleSystem, grant_rewards
from turtle_hero.components import GameState
from turtle_hero.data import DIALOG_PATH
from turtle_hero.dialog import DialogManager, ScenarioLoader
from turtle_hero.save import SaveManager

@pytest.fixture
def config(save_dir):
    return GameConfig(save_dir=save_dir)

@pytest.fixture
def dialogs():
    manager = DialogManager()
    for scenario in ScenarioLoader().load_directory(DIALOG_PATH).values():
        manager.load_scenario(scenario)
    return manager

def fight(battle, player, enemy):
    battle.start_battle(player, enemy)
    result = None
    for _ in range(500):
        if battle.state == BattleState.PLAYER_TURN:
            result = battle.player_attack(player, enemy)
        elif battle.state == BattleState.ENEMY_TURN:
            result = battle.enemy_turn(player, enemy)
        else:
            break
    return result

def test_dialog_into_battle_into_save(config, dialogs, item_db, enemy_db, event_bus):
    state = GameState.new_game(config)
    rng = SeededRandom(seed=11)

    # Talk to the elder and accept the quest
    node = dialogs.get_start_node("forest_elder")
    outcome = dialogs.select_option("forest_elder", node.options[0], state, item_db, rng)
    assert state.has_flag("quest_accepted")

    # Strength 5 is enough to fight the guard
    options = dialogs.get_available_options(outcome.next_node, state.player, state.inventory, state.flags)
    fight_option = next(o for o in options if o.action == "battle")
    outcome = dialogs.select_option("forest_elder", fight_option, state, item_db, rng)

    enemy = enemy_db.create_enemy(outcome.action_parameter)
    ended = []
    event_bus.subscribe(BattleEvent.ENDED, lambda e: ended.append(e), weak=False)
    battle = BattleSystem(rng=rng, event_bus=event_bus)

    # The guard can take at most 1 HP per turn through the turtle's defense
    result = fight(battle, state.player, enemy)
    assert result.is_finished
    assert result.player_won
    assert state.player.is_alive

    rewards = battle.calculate_reward(enemy)
    grant_rewards(rewards, state.player, state.inventory, item_db, rng)
    battle.end_battle()

    assert ended
    assert battle.state == BattleState.IDLE
    assert state.player.experience == 50
    assert enemy_db.create_enemy("snake_guard").current_health == 30

    save_mgr = SaveManager(config=config, item_database=item_db)
    assert save_mgr.save_game(state)

    loaded = save_mgr.load_game()
    assert loaded.player == state.player
    assert loaded.flags == state.flags
    assert loaded.inventory.get_item_count("mushroom_heal") == state.inventory.get_item_count("mushroom_heal")

def test_defeat_and_new_game(config, enemy_db):
    state = GameState.new_game(config)
    state.player.current_health = 1
    tyrant = enemy_db.create_enemy("snake_tyrant")
    battle = BattleSystem(rng=SeededRandom(seed=3))

    result = fight(battle, state.player, tyrant)

    assert result.is_finished
    assert not result.player_won
    assert not state.player.is_alive

    battle.end_battle()
    state.reset(config.default_location)
    assert state.player.is_alive
    assert state.player.current_health == 50

def test_items_between_battles(config, item_db, enemy_db):
    state = GameState.new_game(config)
    state.inventory.add_item(item_db.get_item("mushroom_heal"), 3)
    state.inventory.add_item(item_db.get_item("herb_agility"))
    state.player.equip(item_db.get_item("turtle_shell"))
    spider = enemy_db.create_enemy("spider_illusionist")
    battle = BattleSystem(rng=SeededRandom(seed=1))

    # The herb boost lasts the battle; turn order uses base agility
    battle.player_use_item(state.player, state.inventory, "herb_agility")
    assert state.player.effective_agility == 6
    assert not battle.player_goes_first(state.player, spider)

    state.player.take_damage(30)
    battle.player_use_item(state.player, state.inventory, "mushroom_heal")
    battle.end_battle(state.player)

    assert state.player.temporary_agility_bonus == 0
    assert state.inventory.get_item_count("mushroom_heal") == 2
    assert state.player.effective_defense == 7
