from finding_review.cli import cli

cli(obj={})
