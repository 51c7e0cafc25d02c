"""In-memory inverted index with boolean AND and TF-IDF cosine retrieval."""

from .posting import Posting, DictionaryEntry, Document
from .tokenizer import Normalizer, Stemmer, IdentityStemmer, PorterStemmer, STOP_WORDS, get_stemmer, normalize
from .weighting import tf_weight, idf, tf_idf, cosine_similarity
from .index_builder import InvertedIndex, build_index
from .search import (
    QueryStatus,
    SearchResult,
    RankedResponse,
    BooleanResponse,
    process_query,
    ranked_search,
    boolean_and_search,
)
from .engine import SearchEngine
