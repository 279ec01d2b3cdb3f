import dataclasses
import pytest
from turtle_hero.battle.actor import Enemy, EnemyTemplate, ItemReward, create_enemy_from_template
from turtle_hero.battle.enemies import EnemyDatabase

def test_bundled_enemies(enemy_db):
    assert len(enemy_db) == 5

    guard = enemy_db.get_template("snake_guard")
    assert guard.max_health == 30
    assert guard.has_poison_attack
    assert not guard.has_web_attack
    assert guard.item_rewards[0] == ItemReward("mushroom_heal", 1, 50)

    assert enemy_db.get_template("spider_illusionist").has_web_attack
    assert enemy_db.get_template("snake_tyrant").experience_reward == 500

def test_template_is_frozen(enemy_db):
    template = enemy_db.get_template("snake_guard")

    with pytest.raises(dataclasses.FrozenInstanceError):
        template.strength = 99

def test_create_enemy_gives_fresh_instances(enemy_db):
    first = enemy_db.create_enemy("snake_guard")
    second = enemy_db.create_enemy("snake_guard")

    assert first is not second
    assert first.current_health == first.max_health == 30

    first.take_damage(10)
    assert second.current_health == 30

def test_instance_rewards_are_copies(enemy_db):
    enemy = enemy_db.create_enemy("snake_tyrant")
    enemy.item_rewards[0].quantity = 5
    enemy.item_rewards.clear()

    template = enemy_db.get_template("snake_tyrant")
    assert len(template.item_rewards) == 3
    assert template.item_rewards[0].quantity == 1

def test_unknown_enemy(enemy_db):
    assert enemy_db.create_enemy("dragon") is None
    assert enemy_db.get_template("dragon") is None

def test_enemy_take_damage_subtracts_defense():
    enemy = Enemy(id="rat", name="Rat", max_health=10, defense=2)

    assert enemy.take_damage(5) == 3
    assert enemy.take_damage(1) == 1
    assert enemy.take_damage(0) == 0
    assert enemy.current_health == 6

    enemy.take_damage(100)
    assert enemy.current_health == 0
    assert not enemy.is_alive

def test_enemy_full_restore():
    enemy = Enemy(id="rat", name="Rat", max_health=10, current_health=2, poison_damage=3, agility_debuff=2)

    enemy.full_restore()

    assert enemy.current_health == 10
    assert enemy.poison_damage == 0
    assert enemy.agility_debuff == 0

def test_template_from_record_defaults():
    template = EnemyTemplate.from_dict({"id": "rat", "maxHealth": 8})

    assert template.name == "rat"
    assert template.item_rewards == ()
    assert create_enemy_from_template(template).current_health == 8

def test_register_enemy():
    db = EnemyDatabase()

    assert db.register_enemy(EnemyTemplate(id="rat", name="Rat"))
    assert not db.register_enemy(EnemyTemplate(id="", name="Nobody"))
    assert "rat" in db
    assert [t.id for t in db.get_all_templates()] == ["rat"]
