"""Roadmap timeline UI contracts: lane layout, interaction and exports."""
