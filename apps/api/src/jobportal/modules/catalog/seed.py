"""
Catalog Seed Data

Punjab districts and the advertised posts. Seeding is idempotent: rows whose
name already exists are skipped.
"""

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from .models import District, Post

PUNJAB_DISTRICTS = [
    "Attock",
    "Bahawalnagar",
    "Bahawalpur",
    "Bhakkar",
    "Chakwal",
    "Chiniot",
    "Dera Ghazi Khan",
    "Faisalabad",
    "Gujranwala",
    "Gujrat",
    "Hafizabad",
    "Jhang",
    "Kasur",
    "Khanewal",
    "Khushab",
    "Lahore",
    "Layyah",
    "Lodhran",
    "Mandi Bahauddin",
    "Mianwali",
    "Multan",
    "Muzaffargarh",
    "Nankana Sahib",
    "Narowal",
    "Okara",
    "Pakpattan",
    "Rahim Yar Khan",
    "Rajanpur",
    "Rawalpindi",
    "Sahiwal",
    "Sargodha",
    "Sheikhupura",
    "Sialkot",
    "Toba Tek Singh",
    "Vehari",
    "Murree",
    "Talagang",
    "Kot Addu",
    "Other",
]

POSTS = [
    {
        "name": "Assistant Director",
        "description": "Manage departmental initiatives and supervise teams.",
    },
    {
        "name": "Deputy Director",
        "description": "Oversee programs and coordinate inter-departmental efforts.",
    },
    {
        "name": "Director",
        "description": "Lead strategic planning and execution across the department.",
    },
]


async def seed_catalog(db: AsyncSession) -> tuple[int, int]:
    """
    Insert missing districts and posts.

    Returns:
        (districts inserted, posts inserted)
    """
    districts = await db.execute(
        insert(District)
        .values([{"name": name} for name in PUNJAB_DISTRICTS])
        .on_conflict_do_nothing(index_elements=["name"])
        .returning(District.id)
    )
    district_count = len(districts.all())

    posts = await db.execute(
        insert(Post)
        .values(POSTS)
        .on_conflict_do_nothing(index_elements=["name"])
        .returning(Post.id)
    )
    post_count = len(posts.all())

    await db.commit()
    return district_count, post_count
