import heapq

RECORD_SIZE = 8
TERMINATOR = bytes(RECORD_SIZE)
# A tree over 256 symbols can never be deeper than this.
MAX_DEPTH = 255

_WORD_MASK = (1 << 64) - 1


class HuffmanError(Exception):
    """Base class for everything the codec reports to its callers."""


class FormatError(HuffmanError):
    """The compressed data does not follow the .huff format."""


### HUFFMAN NODE CLASSES ###
class Leaf:
    """A symbol-bearing node.

    ``count`` is the number of occurrences of ``symbol``. While decoding it is
    consumed as a budget: every emitted symbol decrements it.
    """
    __slots__ = ("symbol", "count")

    def __init__(self, symbol, count):
        self.symbol = symbol
        self.count = count

    @property
    def freq(self):
        return self.count

    def __repr__(self):
        return f"Leaf({self.symbol:#04x}, {self.count})"


class Inner:
    """A branching node, always owning exactly two children."""
    __slots__ = ("left", "right", "freq")

    def __init__(self, left, right):
        if left is None or right is None:
            raise ValueError("an inner node needs two children")
        self.left = left
        self.right = right
        self.freq = left.freq + right.freq

    def __repr__(self):
        return f"Inner({self.left!r}, {self.right!r})"


### TREE CONSTRUCTION ###
def build_huffman_tree(freq):
    """
    Builds the Huffman tree from a 256-entry frequency table.

    Nodes are merged smallest first. At equal frequency a leaf beats an inner
    node, the lower symbol beats the higher one, and between inner nodes the
    one created first wins. The first node popped becomes the left child.

    Returns None when no byte occurs. A single distinct byte gets a sibling
    leaf (the next byte value) with count 0 so the root is always inner.
    """
    priority_queue = []
    for symbol, count in enumerate(freq):
        count = int(count)
        if count > 0:
            priority_queue.append((count, 0, symbol, Leaf(symbol, count)))

    if not priority_queue:
        return None
    if len(priority_queue) == 1:
        leaf = priority_queue[0][3]
        return Inner(leaf, Leaf((leaf.symbol + 1) % 256, 0))

    heapq.heapify(priority_queue)
    created = 0
    while len(priority_queue) > 1:
        left = heapq.heappop(priority_queue)[3]
        right = heapq.heappop(priority_queue)[3]
        parent = Inner(left, right)
        heapq.heappush(priority_queue, (parent.freq, 1, created, parent))
        created += 1

    return priority_queue[0][3]


### TREE SERIALIZATION ###
def _node_record(node):
    record = bytearray(((node.freq << 1) & _WORD_MASK).to_bytes(RECORD_SIZE, "little"))
    if isinstance(node, Leaf):
        record[0] |= 1
        record[7] = node.symbol
    else:
        record[7] = 0
    return bytes(record)


def serialize_tree(root):
    """
    Writes the tree as preorder 8-byte records followed by an all-zero record.

    Returns ``(header, paths)`` where ``paths`` maps every leaf symbol to its
    root-to-leaf path (False = left, True = right). An empty tree is just the
    terminator.
    """
    header = bytearray()
    paths = {}
    if root is not None:
        # (node, path) pairs; right is pushed first so left is written first
        stack = [(root, [])]
        while stack:
            node, path = stack.pop()
            header += _node_record(node)
            if isinstance(node, Leaf):
                paths[node.symbol] = path
            else:
                stack.append((node.right, path + [True]))
                stack.append((node.left, path + [False]))
    header += TERMINATOR
    return bytes(header), paths


def generate_codes(root):
    """Returns the symbol -> path table of a tree without serializing it."""
    return serialize_tree(root)[1]


def is_prefix_free(paths):
    """True when no path in the table is a prefix of another one."""
    codes = sorted(tuple(path) for path in paths.values())
    for shorter, longer in zip(codes, codes[1:]):
        if longer[:len(shorter)] == shorter:
            return False
    return True


### TREE DESERIALIZATION ###
def _read_record(reader):
    record = reader.read(RECORD_SIZE)
    if len(record) < RECORD_SIZE:
        raise FormatError("tree header truncated")
    return record


def _read_subtree(reader, record, depth):
    if record[0] & 1:
        count = int.from_bytes(record[:7] + b"\x00", "little") >> 1
        return Leaf(record[7], count)
    if depth > MAX_DEPTH:
        raise FormatError("tree header nested too deep")
    left = _read_subtree(reader, _read_record(reader), depth + 1)
    right = _read_subtree(reader, _read_record(reader), depth + 1)
    return Inner(left, right)


def deserialize_tree(reader):
    """
    Reads a tree header from a binary reader positioned after the magic.

    Leaf counts are loaded fresh on every call, so the returned tree can be
    consumed by exactly one decode. Returns None for the empty tree.
    """
    record = reader.read(RECORD_SIZE)
    # Some encoders write nothing at all after the magic for an empty input.
    if not record or record == TERMINATOR:
        return None
    if len(record) < RECORD_SIZE:
        raise FormatError("tree header truncated")
    if record[0] & 1:
        raise FormatError("tree root must be an inner node")

    root = _read_subtree(reader, record, 1)

    if _read_record(reader) != TERMINATOR:
        raise FormatError("tree header is not followed by the zero terminator")
    return root
