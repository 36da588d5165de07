"""Unit tests for the neighbor relation."""

import pytest

from sudoku_engine.core.topology import build_topology


class TestTopology:
    """Tests for build_topology."""

    @pytest.mark.parametrize("n,expected", [(2, 7), (3, 20), (4, 39), (5, 64), (6, 95)])
    def test_neighbor_count(self, n, expected):
        """Test that every cell has 3S - 2N - 1 neighbors."""
        topology = build_topology(n)
        assert topology.num_neighbors == expected
        for row in topology.neighbors:
            for peers in row:
                assert len(peers) == expected
                assert len(set(peers)) == expected

    def test_neighbor_order(self):
        """Test that neighbors list the column, then the row, then the box."""
        topology = build_topology(3)
        peers = topology.neighbors[0][0]
        assert peers[:8] == tuple((r, 0) for r in range(1, 9))
        assert peers[8:16] == tuple((0, c) for c in range(1, 9))
        assert peers[16:] == ((1, 1), (1, 2), (2, 1), (2, 2))

    def test_symmetric_and_irreflexive(self):
        """Test that the relation is symmetric and excludes the cell itself."""
        topology = build_topology(3)
        for row in range(9):
            for col in range(9):
                peers = topology.neighbors[row][col]
                assert (row, col) not in peers
                for r, c in peers:
                    assert (row, col) in topology.neighbors[r][c]

    def test_cached(self):
        """Test that one size always yields the same instance."""
        assert build_topology(4) is build_topology(4)

    def test_units(self):
        """Test the row, column and box units."""
        topology = build_topology(3)
        assert len(topology.rows) == 9
        assert topology.rows[2][0] == (2, 0)
        assert topology.columns[2][8] == (8, 2)
        assert topology.boxes[4][0] == (3, 3)
        assert topology.boxes[4][-1] == (5, 5)

    def test_box_helpers(self):
        """Test locating the box of a cell."""
        topology = build_topology(3)
        assert topology.box_origin(4, 7) == (3, 6)
        assert topology.box_index(4, 7) == 5
        assert topology.box_index(8, 0) == 6

    def test_invalid_size(self):
        """Test that a non-positive side is rejected."""
        with pytest.raises(ValueError):
            build_topology(0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
