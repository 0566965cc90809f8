import unittest

import httpx
from fastapi import HTTPException

from app.core.config import Settings
from app.movies.service import TMDBService
from tmdb_fakes import FakeTMDB


class TMDBServiceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.tmdb = FakeTMDB()
        self.service = self.tmdb.service()

    async def test_curated_lists(self):
        cases = [
            (self.service.get_popular, "/3/movie/popular"),
            (self.service.get_top_rated, "/3/movie/top_rated"),
            (self.service.get_now_playing, "/3/movie/now_playing"),
            (self.service.get_upcoming, "/3/movie/upcoming"),
        ]
        for method, path in cases:
            with self.subTest(path=path):
                response = await method(page=2)
                self.assertIn("results", response)
                request = self.tmdb.requests[-1]
                self.assertEqual(request.url.path, path)
                self.assertEqual(request.url.params["page"], "2")

    async def test_auth_and_language(self):
        await self.service.get_popular()
        request = self.tmdb.requests[-1]
        self.assertEqual(request.headers["Authorization"], "Bearer test-token")
        self.assertEqual(request.url.params["language"], "en-US")
        self.assertNotIn("api_key", request.url.params)

    async def test_api_key_query_param(self):
        service = self.tmdb.service(token="", api_key="v3key")
        await service.get_popular()
        request = self.tmdb.requests[-1]
        self.assertEqual(request.url.params["api_key"], "v3key")
        self.assertNotIn("Authorization", request.headers)

    async def test_trending_windows(self):
        week = await self.service.get_trending()
        self.assertEqual(self.tmdb.requests[-1].url.path, "/3/trending/movie/week")
        self.assertEqual(len(week["results"]), 25)

        await self.service.get_trending("day")
        self.assertEqual(self.tmdb.requests[-1].url.path, "/3/trending/movie/day")

        with self.assertRaises(ValueError):
            await self.service.get_trending("month")

    async def test_movies_by_genre_uses_and_logic(self):
        await self.service.get_movies_by_genre([28, 35], page=3)
        params = self.tmdb.last_params()
        self.assertEqual(params["with_genres"], "28,35")
        self.assertEqual(params["sort_by"], "popularity.desc")
        self.assertEqual(params["page"], "3")

        await self.service.get_movies_by_genre(28)
        self.assertEqual(self.tmdb.last_params()["with_genres"], "28")

    async def test_search(self):
        await self.service.search_movies("star wars", page=2)
        params = self.tmdb.last_params()
        self.assertEqual(params["query"], "star wars")
        self.assertEqual(params["include_adult"], "false")

    async def test_search_suggestions(self):
        self.assertEqual(await self.service.get_search_suggestions(" a "), [])
        self.assertEqual(self.tmdb.requests, [])

        suggestions = await self.service.get_search_suggestions("  al  ")
        self.assertEqual(len(suggestions), 5)
        self.assertEqual(self.tmdb.last_params()["query"], "al")

        suggestions = await self.service.get_search_suggestions("alien", limit=8)
        self.assertEqual([m["id"] for m in suggestions], list(range(800, 808)))

    async def test_movie_endpoints(self):
        details = await self.service.get_movie_details(27205)
        self.assertEqual(details["title"], "Inception")
        credits = await self.service.get_movie_credits(27205)
        self.assertEqual(credits["cast"][0]["name"], "Leonardo DiCaprio")
        videos = await self.service.get_movie_videos(27205)
        self.assertEqual(videos["results"][0]["site"], "YouTube")
        similar = await self.service.get_similar_movies(27205)
        self.assertEqual(len(similar["results"]), 20)

    async def test_genres(self):
        genres = await self.service.get_genres()
        self.assertEqual(genres[0], {"id": 28, "name": "Action"})

    async def test_non_200_becomes_http_exception(self):
        with self.assertRaises(HTTPException) as ctx:
            await self.service.get_movie_details(1)
        self.assertEqual(ctx.exception.status_code, 404)

        tmdb = FakeTMDB(status_overrides={"/3/movie/popular": 401})
        with self.assertRaises(HTTPException) as ctx:
            await tmdb.service().get_popular()
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.detail, "Failed to fetch popular movies from TMDB")

    async def test_transport_error_becomes_502(self):
        def unreachable(request):
            raise httpx.ConnectError("connection refused", request=request)

        service = TMDBService(transport=httpx.MockTransport(unreachable))
        with self.assertRaises(HTTPException) as ctx:
            await service.get_genres()
        self.assertEqual(ctx.exception.status_code, 502)

    async def test_home_rows(self):
        rows = await self.service.get_home_rows()
        self.assertEqual(len(rows.trending), 12)
        self.assertEqual(len(rows.popular), 12)
        self.assertEqual(len(rows.top_rated), 12)
        self.assertEqual(len(rows.now_playing), 12)
        self.assertEqual(rows.hero["id"], 500)

    async def test_home_hero_falls_back_to_popular(self):
        tmdb = FakeTMDB()
        tmdb.routes["/3/trending/movie/week"] = {"page": 1, "results": []}
        rows = await tmdb.service().get_home_rows(limit=3)
        self.assertEqual(rows.trending, [])
        self.assertEqual(rows.hero["id"], 100)
        self.assertEqual(len(rows.popular), 3)

    async def test_home_hero_none_when_nothing_returned(self):
        empty = {"page": 1, "results": []}
        tmdb = FakeTMDB(routes={
            "/3/trending/movie/week": empty,
            "/3/movie/popular": empty,
            "/3/movie/top_rated": empty,
            "/3/movie/now_playing": empty,
        })
        rows = await tmdb.service().get_home_rows()
        self.assertIsNone(rows.hero)

    async def test_movie_page(self):
        page = await self.service.get_movie_page(27205)
        self.assertEqual(page.movie["id"], 27205)
        self.assertEqual(len(page.similar), 8)
        self.assertEqual(page.display.rating, "8.4")
        self.assertEqual(page.display.release_date, "July 15, 2010")
        self.assertEqual(page.display.release_year, 2010)
        self.assertEqual(page.display.runtime, "2h 28m")
        self.assertEqual(page.display.budget, "$160,000,000")
        self.assertEqual(page.display.revenue, "$825,532,764")
        self.assertEqual(page.display.popularity, 84)
        self.assertEqual(page.display.poster_url, "https://image.tmdb.org/t/p/w500/poster27205.jpg")
        self.assertEqual(page.display.backdrop_url, "https://image.tmdb.org/t/p/w1280/backdrop27205.jpg")

    def test_from_settings(self):
        service = TMDBService.from_settings(Settings(
            TMDB_BASE_URL="https://tmdb.example/3/",
            TMDB_TOKEN="tok",
            TMDB_LANGUAGE="fr-FR",
            TMDB_TIMEOUT=2.5,
        ))
        self.assertEqual(service.base_url, "https://tmdb.example/3")
        self.assertEqual(service.token, "tok")
        self.assertEqual(service.language, "fr-FR")
        self.assertEqual(service.timeout, 2.5)


if __name__ == "__main__":
    unittest.main()
