import copy
import pickle
import suite
from sequin import P, Bindings, InvalidArgumentError, from_range

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

words = P(['apple', 'fig', 'banana', 'kiwi', 'cherry', 'plum', 'date'])


# --- bindings ---

@test("bindings expose variables as attributes and items")
def test_bindings_access():
    b = Bindings(word='fig', length=3)
    assert_that(b.word == 'fig' and b['length'] == 3, "both access styles should work")
    assert_that(b.names() == ('word', 'length'), "names should keep binding order")
    assert_that('word' in b and 'other' not in b, "membership should test names")


@test("bindings are immutable")
def test_bindings_immutable():
    b = Bindings(word='fig')
    assert_raises(AttributeError, lambda: setattr(b, 'word', 'kiwi'))
    extended = b.extend('length', 3)
    assert_that(b.names() == ('word',), "extend should not modify the original")
    assert_that(extended == Bindings(word='fig', length=3), "extend should return a new record")


@test("unbound names raise attribute errors")
def test_bindings_missing():
    assert_raises(AttributeError, lambda: Bindings(word='fig').length)


@test("bindings survive copy, deepcopy and pickle")
def test_bindings_copy_pickle():
    b = Bindings(word='fig', tags=['fruit'])
    assert_that(copy.copy(b) == b, "shallow copy should be equal")
    deep = copy.deepcopy(b)
    assert_that(deep == b and deep.tags is not b.tags, "deepcopy should copy the values")
    restored = pickle.loads(pickle.dumps(b))
    assert_that(restored == b and restored.names() == ('word', 'tags'), "pickle should keep names and order")
    rows = P(['kiwi', 'plum']).query.from_('word').to.list()
    assert_that(pickle.loads(pickle.dumps(rows)) == rows, "materialized query results should pickle")


# --- let: augmenting continuation ---

@test("let keeps earlier variables in scope")
def test_let_augments():
    result = (words
              .query.from_('word')
              .query.let('length', lambda s: len(s.word))
              .query.let('shout', lambda s: s.word.upper() * (s.length > 4))
              .where(lambda s: s.length > 4)
              .select(lambda s: (s.word, s.length, s.shout))
              .to.list())
    assert_that(result == [('apple', 5, 'APPLE'), ('banana', 6, 'BANANA'), ('cherry', 6, 'CHERRY')],
                "later stages should see both the word and the computed values")


@test("let binds raw elements as 'it'")
def test_let_raw_element():
    result = from_range(1, 3).query.let('square', lambda s: s.it * s.it).query.unpack('it', 'square').to.list()
    assert_that(result == [(1, 1), (2, 4), (3, 9)], "raw elements should be reachable as 'it'")


@test("let is deferred")
def test_let_deferred():
    calls = []
    pipeline = words.query.let('n', lambda s: calls.append(s.it) or 1)
    assert_that(calls == [], "selector should not run before enumeration")
    pipeline.take(2).to.list()
    assert_that(calls == ['apple', 'fig'], "selector should run only for pulled elements")


# --- into: re-binding continuation ---

@test("into replaces the working variable")
def test_into_rebinds():
    result = (words
              .query.from_('word')
              .query.let('length', lambda s: len(s.word))
              .query.into('size', lambda s: s.length)
              .to.list())
    assert_that(result[0] == Bindings(size=5), "only the new variable should remain")
    assert_raises(AttributeError, lambda: result[0].word)


@test("group into continues over whole groups")
def test_group_into():
    result = (words
              .query.from_('word')
              .group.group_by(lambda s: len(s.word), lambda s: s.word)
              .query.into('g')
              .where(lambda s: len(s.g) > 1)
              .query.let('total', lambda s: len(s.g))
              .select(lambda s: (s.g.key, s.g.to.list(), s.total))
              .to.list())
    assert_that(result == [(6, ['banana', 'cherry'], 2), (4, ['kiwi', 'plum', 'date'], 3)],
                "groups with more than one member should continue the query")


@test("select projects a single variable")
def test_query_select():
    names = words.query.from_('word').query.let('n', lambda s: len(s.word)).query.select('word').take(2)
    assert_that(names.to.list() == ['apple', 'fig'], "should project the bound word")


@test("continuations compose with plain chaining")
def test_continuation_is_plain_chaining():
    with_let = words.query.let('n', lambda s: len(s.it)).where(lambda s: s.n == 4).query.select('it').to.list()
    plain = words.where(lambda w: len(w) == 4).to.list()
    assert_that(with_let == plain, "let should behave like an inline projection")


@test("continuations validate names and selectors")
def test_query_validation():
    assert_raises(InvalidArgumentError, lambda: words.query.from_('not a name'))
    assert_raises(InvalidArgumentError, lambda: words.query.let('n', None))
    assert_raises(InvalidArgumentError, lambda: words.query.into(3))
    assert_raises(InvalidArgumentError, lambda: words.query.into('x', selector='nope'))
    assert_raises(InvalidArgumentError, lambda: words.query.unpack())


if __name__ == "__main__":
    suite.main(title="sequin query continuation test")
