import unittest

from downhill.slope.collision import CollisionDetector, overlaps
from downhill.slope.models import Direction, Obstacle, ObstacleType, Rect, Skier, SpriteId, SpriteSizes

WIDTH, HEIGHT = 800, 600


class TestOverlaps(unittest.TestCase):
    def test_given_shared_edge_then_counts_as_overlap(self):
        a = Rect(left=0, right=10, top=0, bottom=5)
        self.assertTrue(overlaps(a, Rect(left=10, right=20, top=0, bottom=5)))
        self.assertTrue(overlaps(a, Rect(left=0, right=10, top=5, bottom=10)))

    def test_given_gap_then_no_overlap(self):
        a = Rect(left=0, right=10, top=0, bottom=5)
        self.assertFalse(overlaps(a, Rect(left=11, right=20, top=0, bottom=5)))
        self.assertFalse(overlaps(a, Rect(left=0, right=10, top=6, bottom=10)))


class TestCollisionDetector(unittest.TestCase):
    def setUp(self):
        self.sprites = SpriteSizes()
        self.detector = CollisionDetector(WIDTH, HEIGHT, self.sprites, margin=5)
        self.skier = Skier(direction=Direction.DOWN)

    def test_skier_rect_uses_feet_slab(self):
        rect = self.detector.skier_rect(self.skier)
        # SKIER_DOWN is 9x20
        self.assertEqual(rect, Rect(left=400, right=409, top=315, bottom=320))

    def test_obstacle_rect_uses_feet_slab(self):
        rect = self.detector.obstacle_rect(Obstacle(10, 20, ObstacleType.TREE))
        self.assertEqual(rect, Rect(left=10, right=34, top=49, bottom=54))

    def test_given_tree_at_skier_feet_then_collides(self):
        tree = Obstacle(400, 320 - 34, ObstacleType.TREE)
        self.assertIs(self.detector.find_collision(self.skier, [tree]), tree)

    def test_given_tree_trunk_above_feet_then_no_collision(self):
        # Bottom edge one pixel above the skier's slab
        tree = Obstacle(400, 314 - 34, ObstacleType.TREE)
        self.assertIsNone(self.detector.find_collision(self.skier, [tree]))

    def test_given_several_hits_then_first_in_order_wins(self):
        rock = Obstacle(405, 320 - 15, ObstacleType.ROCK_1)
        tree = Obstacle(400, 320 - 34, ObstacleType.TREE)
        self.assertIs(self.detector.find_collision(self.skier, [rock, tree]), rock)
        self.assertIs(self.detector.find_collision(self.skier, [tree, rock]), tree)

    def test_given_missing_skier_size_then_no_collision(self):
        self.sprites.remove(SpriteId.SKIER_DOWN)
        tree = Obstacle(400, 320 - 34, ObstacleType.TREE)
        self.assertIsNone(self.detector.find_collision(self.skier, [tree]))

    def test_given_missing_obstacle_size_then_obstacle_skipped(self):
        self.sprites.remove(SpriteId.ROCK_2)
        rock = Obstacle(400, 320 - 16, ObstacleType.ROCK_2)
        tree = Obstacle(400, 320 - 34, ObstacleType.TREE)
        self.assertIs(self.detector.find_collision(self.skier, [rock, tree]), tree)

    def test_given_skier_moves_then_rect_follows_map_position(self):
        self.skier.map_x = 100
        self.skier.map_y = 50
        rect = self.detector.skier_rect(self.skier)
        self.assertEqual((rect.left, rect.bottom), (500, 370))


if __name__ == "__main__":
    unittest.main()
