"""Camp HQ API: recruitment funnel and membership pipeline."""
