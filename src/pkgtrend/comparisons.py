"""Popular package comparisons available as presets."""

from .types import Comparison, PackageGroup

# (title, [(package names, color), ...])
_POPULAR: list[tuple[str, list[tuple[list[str], str]]]] = [
    (
        "Data Fetching",
        [
            (["@tanstack/react-query", "react-query"], "#FF4500"),
            (["swr"], "#ec4899"),
            (["@apollo/client"], "#6B46C1"),
            (["@trpc/client"], "#2596BE"),
        ],
    ),
    (
        "State Management",
        [
            (["redux"], "#764ABC"),
            (["mobx"], "#FF9955"),
            (["zustand"], "#764ABC"),
            (["jotai"], "#6366f1"),
            (["valtio"], "#FF6B6B"),
            (["@tanstack/react-query", "react-query"], "#FF4500"),
        ],
    ),
    (
        "Table/Grid Libraries",
        [
            (["ag-grid-community", "ag-grid-enterprise"], "#29B6F6"),
            (["@tanstack/react-table", "react-table"], "#FF7043"),
            (["handsontable"], "#FFCA28"),
            (["@mui/x-data-grid", "mui-datatables"], "#1976D2"),
            (["react-data-grid"], "#4CAF50"),
        ],
    ),
    (
        "Virtualization Libraries",
        [
            (["react-virtualized"], "#FF6B6B"),
            (["react-window"], "#4ECDC4"),
            (["@tanstack/react-virtual", "react-virtual"], "#FF4500"),
            (["react-lazyload"], "#FFD93D"),
            (["virtua"], "#6C5CE7"),
            (["react-virtuoso"], "#00B894"),
        ],
    ),
    (
        "UI Frameworks",
        [
            (["react"], "#61DAFB"),
            (["vue"], "#41B883"),
            (["@angular/core"], "#DD0031"),
            (["svelte"], "#FF3E00"),
            (["preact"], "#673AB8"),
        ],
    ),
    (
        "Build Tools",
        [
            (["webpack"], "#8DD6F9"),
            (["vite"], "#008000"),
            (["rollup"], "#e80A3F"),
            (["rolldown"], "#FF5733"),
            (["esbuild"], "#FFCF00"),
            (["@swc/core"], "#DEAD0F"),
            (["parcel"], "#2D8CFF"),
            (["@rspack/core"], "#8DD6F9"),
        ],
    ),
    (
        "Testing Frameworks",
        [
            (["jest"], "#C21325"),
            (["vitest"], "#646CFF"),
            (["@testing-library/react"], "#E33332"),
            (["cypress"], "#4A5568"),
            (["playwright"], "#2EAD33"),
            (["@storybook/react"], "#FF4785"),
        ],
    ),
    (
        "Date Libraries",
        [
            (["date-fns"], "#E91E63"),
            (["dayjs"], "#FF6B6B"),
            (["luxon"], "#3498DB"),
            (["moment"], "#4A5568"),
            (["@date-io/date-fns"], "#FFD700"),
            (["temporal-polyfill"], "#a855f7"),
        ],
    ),
    (
        "Type Checking",
        [
            (["zod"], "#ef4444"),
            (["io-ts"], "#3b82f6"),
            (["arktype"], "#10b981"),
            (["valibot"], "#f97316"),
            (["yup"], "#06b6d4"),
            (["@sinclair/typebox"], "#d946ef"),
        ],
    ),
    (
        "Routing",
        [
            (["react-router"], "#FF0000"),
            (["@tanstack/react-router"], "#32CD32"),
            (["next"], "#4682B4"),
            (["wouter"], "#8b5cf6"),
            (["expo"], "#f59e0b"),
        ],
    ),
]


def _make_group(names: list[str], color: str) -> PackageGroup:
    return {"packages": [{"name": name} for name in names], "color": color}


def get_popular_comparisons() -> list[Comparison]:
    """Return fresh copies of the built-in comparison presets."""
    return [
        {"title": title, "groups": [_make_group(names, color) for names, color in groups]}
        for title, groups in _POPULAR
    ]


def find_comparison(title: str) -> Comparison | None:
    """Look up a preset by title, ignoring case."""
    wanted = title.strip().lower()
    for comparison in get_popular_comparisons():
        if comparison["title"].lower() == wanted:
            return comparison
    return None
