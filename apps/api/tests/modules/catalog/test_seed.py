"""
Tests for catalog seed data.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from jobportal.modules.catalog.seed import POSTS, PUNJAB_DISTRICTS, seed_catalog


class TestSeedData:
    def test_district_names_are_unique(self):
        assert len(PUNJAB_DISTRICTS) == len(set(PUNJAB_DISTRICTS))

    def test_other_district_is_offered(self):
        assert "Other" in PUNJAB_DISTRICTS

    def test_posts_have_descriptions(self):
        assert len({post["name"] for post in POSTS}) == len(POSTS)
        assert all(post["description"] for post in POSTS)


class TestSeedCatalog:
    @pytest.mark.asyncio
    async def test_reports_inserted_rows(self):
        districts = MagicMock()
        districts.all.return_value = [(1,), (2,)]
        posts = MagicMock()
        posts.all.return_value = []

        db = AsyncMock()
        db.execute = AsyncMock(side_effect=[districts, posts])

        result = await seed_catalog(db)

        assert result == (2, 0)
        assert db.execute.await_count == 2
        db.commit.assert_awaited_once()
