"""Client-side proof-of-work for SkillStake reward claims."""

__version__ = "0.1.0"
