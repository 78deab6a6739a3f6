from __future__ import annotations

from pathlib import Path

import pytest

from wordnet_sap import Digraph

# 13 vertices, 11 edges; vertex 6 is isolated.
DIGRAPH1_EDGES = [
    (7, 3),
    (8, 3),
    (3, 1),
    (4, 1),
    (5, 1),
    (9, 5),
    (10, 5),
    (11, 10),
    (12, 10),
    (1, 0),
    (2, 0),
]

SYNSETS = """\
0,entity,that which is perceived or known to have its own distinct existence
1,physical_entity,an entity that has physical existence
2,abstraction abstract_entity,a general concept formed by extracting common features
3,object physical_object,a tangible and visible entity
4,thing,a separate and self-contained entity
5,whole unit,an assemblage of parts that is regarded as a single entity
6,living_thing animate_thing,a living (or once living) entity
7,organism being,a living thing that has the ability to act or function independently
8,animal,a living organism characterized by voluntary movement
9,plant flora,a living organism lacking the power of locomotion
10,measure quantity amount,how much there is or how many there are of something
11,unit unit_of_measurement,any division of quantity accepted as a standard
12,dog domestic_dog,a member of the genus Canis, domesticated by man since prehistoric times
13,cat,feline mammal usually having thick soft fur
14,tree,a tall perennial woody plant having a main trunk and branches
15,meter metre,the basic unit of length adopted under the Systeme International
"""

HYPERNYMS = """\
0
1,0
2,0
3,1
4,1
5,3
6,5
7,6
8,7
9,7
10,2
11,10
12,8
13,8
14,9
15,11
"""


@pytest.fixture()
def digraph1() -> Digraph:
    return Digraph.from_edges(13, DIGRAPH1_EDGES)


@pytest.fixture()
def digraph1_file(tmp_path: Path) -> Path:
    lines = ["13", str(len(DIGRAPH1_EDGES))]
    lines.extend(f"{v} {w}" for v, w in DIGRAPH1_EDGES)
    path = tmp_path / "digraph1.txt"
    path.write_text("\n".join(lines) + "\n", encoding="utf8")
    return path


@pytest.fixture()
def wordnet_files(tmp_path: Path) -> tuple[Path, Path]:
    synsets = tmp_path / "synsets.txt"
    hypernyms = tmp_path / "hypernyms.txt"
    synsets.write_text(SYNSETS, encoding="utf8")
    hypernyms.write_text(HYPERNYMS, encoding="utf8")
    return synsets, hypernyms
