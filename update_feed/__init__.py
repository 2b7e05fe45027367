"""Update feed pipeline: multi-repository commit history as a classified activity feed."""
