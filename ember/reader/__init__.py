from ember.reader.lexer import Token, TokenKind, Tokenizer, classify, lex
from ember.reader.parser import ParseError, ParseResult, Parser, parse
