"""StitchMap - Stitch-by-stitch tracking through crochet patterns."""
