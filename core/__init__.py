"""Quiz-taking core: session state, scoring and the API client."""
