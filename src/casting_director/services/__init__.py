"""
Request-level services.

- BookAnalysisService: characters, budgets and studio for a book
- ActorFeeService: cached actor fee lookups (getOrFetch)
- MovieResultsService: simulated box office and critical reception
"""

from casting_director.services.actor_fee import ActorFeeService
from casting_director.services.book_analysis import BookAnalysisService
from casting_director.services.movie_results import MovieDetails, MovieResultsService

__all__ = [
    "ActorFeeService",
    "BookAnalysisService",
    "MovieDetails",
    "MovieResultsService",
]
