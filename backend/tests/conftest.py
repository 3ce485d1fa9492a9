"""Shared test fixtures."""

from __future__ import annotations

import pytest

from svgscene.svg.text import TextExtents, TextStyle


# Stroke-based icons: styling lives on the root element

CIRCLE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <circle cx="12" cy="12" r="10"/>
</svg>'''

SMILEY_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <circle cx="12" cy="12" r="10"/>
  <circle cx="8" cy="9" r="1"/>
  <circle cx="16" cy="9" r="1"/>
  <path d="M8 14s1.5 2 4 2 4-2 4-2"/>
</svg>'''

HOME_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <path d="M15 21v-8a1 1 0 0 0-1-1h-4a1 1 0 0 0-1 1v8"/>
  <path d="M3 10a2 2 0 0 1 .709-1.528l7-5.999a2 2 0 0 1 2.582 0l7 5.999A2 2 0 0 1 21 10v9a2 2 0 0 1-2 2H5a2 2 0 0 1-2-2z"/>
</svg>'''

BAR_CHART_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <line x1="18" x2="18" y1="20" y2="10"/>
  <line x1="12" x2="12" y1="20" y2="4"/>
  <line x1="6" x2="6" y1="20" y2="14"/>
</svg>'''


# Filled documents

RED_SQUARE_SVG = '<svg width="10" height="10"><rect x="0" y="0" width="10" height="10" fill="#ff0000"/></svg>'

FILLED_RECT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <rect x="10" y="10" width="80" height="80" fill="#4ECDC4"/>
  <circle cx="50" cy="50" r="20" fill="#FF6B6B"/>
</svg>'''

FILLED_COMPLEX_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 256 259">
  <path d="M128 10 L240 80 L240 200 L128 249 L16 200 L16 80 Z" fill="#4ECDC4"/>
  <path d="M128 50 L200 100 L200 180 L128 220 L56 180 L56 100 Z" fill="#45B7D1"/>
  <circle cx="128" cy="130" r="30" fill="#FF6B6B"/>
  <circle cx="100" cy="110" r="10" fill="#FFEAA7"/>
  <circle cx="156" cy="110" r="10" fill="#FFEAA7"/>
</svg>'''


# Gradients: "b" points forward at "a"

GRADIENT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="100" height="50">
  <defs>
    <linearGradient id="b" xlink:href="#a" gradientTransform="scale(2)"/>
    <linearGradient id="a" spreadMethod="reflect">
      <stop offset="0%" stop-color="red"/>
      <stop offset="100%" stop-color="#0000ff" stop-opacity="0.5"/>
    </linearGradient>
    <radialGradient id="glow" gradientUnits="userSpaceOnUse" cx="50" cy="25" r="20">
      <stop offset="0" style="stop-color:white"/>
      <stop offset="1" style="stop-color:black"/>
    </radialGradient>
  </defs>
  <rect id="left" x="0" y="0" width="50" height="50" fill="url(#b)"/>
  <rect id="right" x="50" y="0" width="50" height="50" fill="url(#glow)" stroke="url(#missing)"/>
</svg>'''


# Groups: inheritance, hiding, opacity layer, the bounds layer

GROUPS_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100">
  <g id="bounds">
    <rect x="5" y="5" width="190" height="90"/>
  </g>
  <g id="tinted" fill="green" stroke="blue" stroke-width="4" transform="translate(10,10)">
    <rect id="inherits" x="0" y="0" width="20" height="20"/>
    <rect id="own" x="30" y="0" width="20" height="20" fill="yellow" stroke="none"/>
    <rect id="after" x="60" y="0" width="20" height="20"/>
  </g>
  <g id="gone" style="display:none">
    <rect id="hidden-rect" x="0" y="0" width="200" height="100"/>
    <g><circle id="hidden-circle" cx="5" cy="5" r="5"/></g>
  </g>
  <g id="faded" opacity="0.5">
    <circle id="dot" cx="150" cy="50" r="10" fill="red"/>
  </g>
  <metadata><rect id="meta-rect" width="10" height="10"/></metadata>
</svg>'''


DEFS_USE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="40" height="40">
  <defs>
    <path id="tri" d="M0 0 L10 0 L5 10 Z"/>
    <rect id="defs-rect" width="40" height="40"/>
  </defs>
  <use id="copy" xlink:href="#tri" transform="translate(20,20)" fill="#123456"/>
  <use id="dangling" xlink:href="#nope"/>
</svg>'''


TEXT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100">
  <g font-size="20" text-align="center">
    <text id="title" x="50" y="40" fill="black">Hello<tspan id="sub" x="50" y="80" alignment-baseline="top">World</tspan></text>
  </g>
</svg>'''


class FixedMeasurer:
    """Every character is 10 wide; ink spans 8 above to 2 below the baseline."""

    def measure(self, text: str, style: TextStyle) -> TextExtents:
        return TextExtents(10.0 * len(text), -8.0, 2.0)


@pytest.fixture
def measurer() -> FixedMeasurer:
    return FixedMeasurer()


@pytest.fixture
def circle_svg() -> str:
    return CIRCLE_SVG


@pytest.fixture
def smiley_svg() -> str:
    return SMILEY_SVG
