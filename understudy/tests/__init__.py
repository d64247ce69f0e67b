"""Test suite for Understudy.

Organized into three categories:

1. core/: Unit tests for the matching, resolution and verification engine
   - No third-party dependencies, fast execution
   - Uses the sample substitutes from fakes/

2. fakes/: Sample substitutes and value types
   - A mocked interface implemented by inheritance and by delegation
   - A user-defined comparable value type

3. Top level: configuration and pytest plugin tests
"""
