"""Union-Find (Disjoint Set) data structure for tracking connected maze cells."""

from typing import Dict, List, Protocol


class DisjointSets(Protocol):
    """Operations the maze generator needs from a disjoint-set structure."""
    
    @property
    def count(self) -> int: ...
    
    def num_sets(self) -> int: ...
    
    def find(self, x: int) -> int: ...
    
    def union(self, x: int, y: int) -> bool: ...


class UnionFind:
    """Union-Find over the elements 0..size-1 with path compression and union by rank."""
    
    def __init__(self, size: int) -> None:
        """Initialize Union-Find with one singleton set per element.
        
        Args:
            size: Number of elements to track
        """
        self.parent: List[int] = list(range(size))
        self.rank: List[int] = [0] * size
        self.size: List[int] = [1] * size
        self._num_sets = size
    
    @property
    def count(self) -> int:
        """Number of elements tracked."""
        return len(self.parent)
    
    def num_sets(self) -> int:
        """Return the current number of disjoint sets."""
        return self._num_sets
    
    def find(self, x: int) -> int:
        """Find root of element with path compression.
        
        Args:
            x: Element to find root for
            
        Returns:
            Root element
        """
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression: point every node on the way directly at the root
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root
    
    def union(self, x: int, y: int) -> bool:
        """Union two elements by rank.
        
        Args:
            x: First element
            y: Second element
            
        Returns:
            True if union was performed, False if already connected
        """
        root_x = self.find(x)
        root_y = self.find(y)
        
        if root_x == root_y:
            return False
        
        if self.rank[root_x] < self.rank[root_y]:
            root_x, root_y = root_y, root_x
        
        self.parent[root_y] = root_x
        self.size[root_x] += self.size[root_y]
        if self.rank[root_x] == self.rank[root_y]:
            self.rank[root_x] += 1
        
        self._num_sets -= 1
        return True
    
    def connected(self, x: int, y: int) -> bool:
        """Check if two elements are in the same set."""
        return self.find(x) == self.find(y)
    
    def get_components(self) -> Dict[int, List[int]]:
        """Get all connected components.
        
        Returns:
            Dictionary mapping root -> list of elements in component
        """
        components: Dict[int, List[int]] = {}
        
        for element in range(self.count):
            root = self.find(element)
            if root not in components:
                components[root] = []
            components[root].append(element)
        
        return components
    
    def get_component_sizes(self) -> Dict[int, int]:
        """Get sizes of all components.
        
        Returns:
            Dictionary mapping root -> component size
        """
        sizes = {}
        for element in range(self.count):
            root = self.find(element)
            sizes[root] = self.size[root]
        return sizes
