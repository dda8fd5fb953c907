"""
Model Factories for Tests

Concrete Factory subclasses covering the supported model shapes, plus
factories whose blueprints count calls or fail on purpose.
"""

import random
import string
from collections import namedtuple
from datetime import datetime
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from modelfactory import Factory


class ExampleFactoryClass(Factory[Dict[str, Any]]):
    """Dictionary factory with a single default field"""

    def definition(self) -> Dict[str, Any]:
        return {
            'example': 'I AM AN EXAMPLE',
        }

    def example_state(self):
        """A test state for the example factory"""
        return self.state(lambda attributes: {**attributes, 'state': 'This was an example state!'})


ExampleFactory = ExampleFactoryClass()


@dataclass
class PlayerData:
    """Test data structure for player information"""
    name: str
    session_id: str
    has_responded: bool = False
    response_text: Optional[str] = None
    total_score: int = 0
    tags: List[str] = field(default_factory=list)
    join_time: datetime = field(default_factory=datetime.now)


class PlayerFactory(Factory[PlayerData]):
    """Dataclass factory with named states"""

    def definition(self) -> PlayerData:
        return PlayerData(
            name='Player1',
            session_id=''.join(random.choices(string.ascii_lowercase + string.digits, k=16)),
        )

    def responded(self, text: str = 'A response'):
        """Mark the player as having responded"""
        def apply(player: PlayerData) -> PlayerData:
            player.has_responded = True
            player.response_text = text
            return player
        return self.state(apply)

    def scored(self, points: int):
        """Add points to the player's total score"""
        def apply(player: PlayerData) -> PlayerData:
            player.total_score += points
            return player
        return self.state(apply)

    def doubled(self):
        """Double the player's total score"""
        def apply(player: PlayerData) -> PlayerData:
            player.total_score *= 2
            return player
        return self.state(apply)


class Session:
    """Plain attribute object used as a model"""

    def __init__(self, session_id: str, active: bool = True):
        self.session_id = session_id
        self.active = active


class SessionFactory(Factory[Session]):
    """Factory producing plain objects"""

    def definition(self) -> Session:
        return Session('session_1')


class CountingFactory(Factory[Dict[str, Any]]):
    """Records how many times its blueprint was invoked"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = 0

    def definition(self) -> Dict[str, Any]:
        self.calls += 1
        return {'sequence': self.calls}


SHARED_TAGS: List[str] = []


class SharedNestedFactory(Factory[Dict[str, Any]]):
    """Blueprint that hands out the same nested list on every call"""

    def definition(self) -> Dict[str, Any]:
        return {'name': 'shared', 'tags': SHARED_TAGS}


class FailingFactory(Factory[Dict[str, Any]]):
    """Blueprint that always raises"""

    def definition(self) -> Dict[str, Any]:
        raise RuntimeError('blueprint exploded')


Point = namedtuple('Point', 'x y')


class PointFactory(Factory[Point]):
    """Factory producing namedtuples"""

    def definition(self) -> Point:
        return Point(0, 0)

    def shifted(self, dx: int):
        """Move the point along x"""
        return self.state(lambda point: point._replace(x=point.x + dx))
