"""Default example programs offered for each language."""

from __future__ import annotations

from . import constants

DEFAULT_SOURCES: dict[str, str] = {
    constants.LANGUAGE_PYTHON: """\
def bubble_sort(arr):
    n = len(arr)
    for i in range(n):
        for j in range(0, n-i-1):
            if arr[j] > arr[j+1]:
                arr[j], arr[j+1] = arr[j+1], arr[j]
    return arr

my_array = [64, 34, 25, 12, 22, 11, 90]
sorted_array = bubble_sort(my_array)
print(sorted_array)""",
    constants.LANGUAGE_JAVASCRIPT: """\
function bubbleSort(arr) {
    const n = arr.length;
    for (let i = 0; i < n; i++) {
        for (let j = 0; j < n - i - 1; j++) {
            if (arr[j] > arr[j + 1]) {
                [arr[j], arr[j + 1]] = [arr[j + 1], arr[j]];
            }
        }
    }
    return arr;
}

let myArray = [64, 34, 25, 12, 22, 11, 90];
let sortedArray = bubbleSort(myArray);
console.log(sortedArray);""",
}


def default_source(language: str) -> str:
    """Return the example program for *language*.

    Raises ``ValueError`` if *language* has no example.
    """
    source = DEFAULT_SOURCES.get(language)
    if source is None:
        raise ValueError(f"No default source for language: {language}")
    return source
