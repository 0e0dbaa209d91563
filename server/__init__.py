"""HTTP surface for the Klondike engine."""
