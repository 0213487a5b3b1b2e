from collections import deque

from .util import FewElementsError


class Stack:
    '''
    LIFO stack of floats. The right end of the deque is the top.

    Operations needing n elements check depth first, and leave the stack
    untouched when there are not enough.
    '''

    def __init__(self, values=()):
        self._values = deque(values)

    def __len__(self):
        return len(self._values)

    def __iter__(self):
        '''
        Iterate top of the stack first.
        '''
        return reversed(self._values)

    def __repr__(self):
        return 'Stack({})'.format(list(self._values))

    def _require(self, n):
        if len(self._values) < n:
            raise FewElementsError(n, len(self._values))

    def push(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self._values.extend(new)

    def pop(self):
        '''
        Remove and return the top.
        '''
        self._require(1)
        return self._values.pop()

    def pop_two(self):
        '''
        Remove the top two, returned as (second from top, top).
        '''
        self._require(2)
        top = self._values.pop()
        return self._values.pop(), top

    def popn(self, n):
        '''
        Remove the top n, returned bottom-most first.
        '''
        self._require(n)
        return list(reversed([self._values.pop() for _ in range(n)]))

    def peek(self):
        self._require(1)
        return self._values[-1]

    def clear(self):
        self._values.clear()

    def size(self):
        '''
        Push the current depth.
        '''
        self._values.append(float(len(self._values)))
