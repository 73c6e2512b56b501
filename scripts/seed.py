"""Database seeder: users, hashtagged articles and comments for local runs."""
import argparse
import asyncio
import logging
import random
import time

from board.auditing import auditing
from board.database import Base, async_session, engine
from board.log_config import setup_logging
from board.schemas import ArticleCommentDto, ArticleDto, UserAccountDto
from board.services import article_comment_service, article_service, user_account_service

logger = logging.getLogger("seed")

HASHTAGS = ["#python", "#fastapi", "#postgresql", "#sqlalchemy", "#docker", "#testing",
            "#asyncio", "#pydantic", "#devops", "#security", "#performance", "#career"]

TOPICS = ["migrating to async", "structuring services", "writing fast tests",
          "pagination done right", "hashtag search", "reviewing pull requests"]


async def seed(small: bool = False) -> None:
    num_users = 5 if small else 30
    num_articles = 50 if small else 1000
    max_comments_per_article = 3 if small else 8

    logger.info(
        "Seeding: %d users, %d articles, up to %d comments per article",
        num_users, num_articles, max_comments_per_article,
    )
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        users: list[UserAccountDto] = []
        for i in range(num_users):
            users.append(
                await user_account_service.save_user_account(
                    session,
                    UserAccountDto(
                        user_id=f"user{i:03d}",
                        user_password="{noop}seed-password",
                        email=f"user{i:03d}@example.com",
                        nickname=f"User {i}",
                        memo=f"Seed account number {i}.",
                    ),
                )
            )

        total_comments = 0
        for i in range(num_articles):
            author = random.choice(users)
            tags = " ".join(random.sample(HASHTAGS, k=random.randint(0, 3)))
            with auditing(author.user_id):
                result = await article_service.save_article(
                    session,
                    ArticleDto(
                        user_account=author,
                        title=f"Article {i}: {random.choice(TOPICS)}",
                        content=f"Notes on {random.choice(TOPICS)}. {tags}",
                    ),
                )

            for _ in range(random.randint(0, max_comments_per_article)):
                commenter = random.choice(users)
                with auditing(commenter.user_id):
                    await article_comment_service.save_article_comment(
                        session,
                        ArticleCommentDto(
                            article_id=result.entity_id,
                            user_account=commenter,
                            content=f"Thanks {author.nickname}, this helped.",
                        ),
                    )
                total_comments += 1

            if (i + 1) % 250 == 0:
                logger.info("  %d articles created", i + 1)

        await session.commit()
        hashtag_count = len(await article_service.get_hashtags(session))

    elapsed = time.perf_counter() - start
    logger.info(
        "Seeding complete in %.1fs: %d users, %d articles, %d comments, %d hashtags",
        elapsed, num_users, num_articles, total_comments, hashtag_count,
    )


def main():
    parser = argparse.ArgumentParser(description="Seed the board database")
    parser.add_argument("--small", action="store_true", help="Use small dataset (50 articles)")
    args = parser.parse_args()
    setup_logging()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
