import suite
from dgen import from_schema
from sequin import P, Enumerable, InvalidArgumentError, from_iterable, from_range, count_from, defer, empty, repeat, generate

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

# test data schemas
person_schema = {
    'name': 'first_name',
    'age': ('pyint', {'min_value': 18, 'max_value': 65}),
    'department': {'_qen_provider': 'choice', 'from': ['eng', 'sales', 'hr', 'marketing']},
}

# helper data
numbers = P(range(1, 11))  # 1 through 10
words = P(['apple', 'banana', 'cherry', 'date', 'elderberry'])
nested_data = P([[1, 2], [3, 4, 5], [], [6]])


# factories

@test("factories build deferred sequences")
def test_factories():
    assert_that(from_range(3, 4).to.list() == [3, 4, 5, 6], "from_range should yield count items from start")
    assert_that(repeat('x', 3).to.list() == ['x', 'x', 'x'], "repeat should yield the item count times")
    assert_that(empty().to.list() == [], "empty should yield nothing")
    assert_that(generate(lambda: 7, 2).to.list() == [7, 7], "generate should call the function count times")
    assert_that(from_range(0, -5).to.list() == [], "negative range count should clamp to empty")


@test("from_iterable returns an enumerable unchanged")
def test_from_iterable_passthrough():
    assert_that(from_iterable(numbers) is numbers, "wrapping an enumerable should not add a stage")


@test("infinite sources work when bounded downstream")
def test_infinite_sources():
    evens = count_from(1).where(lambda x: x % 2 == 0).take(3).to.list()
    assert_that(evens == [2, 4, 6], "should take the first three evens of an endless count")
    assert_that(repeat('a').take(2).to.list() == ['a', 'a'], "unbounded repeat should be cut by take")
    assert_that(generate(lambda: 1).take(4).to.count() == 4, "unbounded generate should be cut by take")


# where() and select()

@test("where filters elements correctly")
def test_where_basic():
    evens = numbers.where(lambda x: x % 2 == 0).to.list()
    assert_that(evens == [2, 4, 6, 8, 10], "should filter even numbers")


@test("where with index passes the position")
def test_where_with_index():
    result = P([10, 20, 30, 40]).where(lambda x, i: i % 2 == 0, with_index=True).to.list()
    assert_that(result == [10, 30], "should keep even positions")


@test("where with generated records")
def test_where_generated():
    people = from_schema(person_schema, seed=42).take(30)
    engineers = people.where(lambda p: p['department'] == 'eng').to.list()
    for person in engineers:
        assert_that(person['department'] == 'eng', "all should be engineers")


@test("select transforms elements")
def test_select_basic():
    squares = numbers.select(lambda x: x * x).to.list()
    assert_that(squares == [1, 4, 9, 16, 25, 36, 49, 64, 81, 100], "should square all numbers")


@test("select_with_index includes indices")
def test_select_with_index_basic():
    indexed = words.select_with_index(lambda word, i: f"{i}:{word}").to.list()
    assert_that(indexed[0] == "0:apple", "first item should be '0:apple'")
    assert_that(indexed[-1] == "4:elderberry", "last item should be '4:elderberry'")


@test("select_many flattens sequences")
def test_select_many_basic():
    flattened = nested_data.select_many(lambda x: x).to.list()
    assert_that(flattened == [1, 2, 3, 4, 5, 6], "should flatten all sublists")


@test("of_type filters by type")
def test_of_type_basic():
    mixed = P([1, 'hello', 2.5, None, 'world'])
    assert_that(mixed.of_type(str).to.list() == ['hello', 'world'], "should only return strings")


# ordering

@test("order_by sorts ascending and is stable")
def test_order_by_basic():
    data = P([{'key': 2, 'value': 'b'}, {'key': 1, 'value': 'a'}, {'key': 1, 'value': 'c'}])
    ordered = data.order_by(lambda x: x['key']).select(lambda x: x['value']).to.list()
    assert_that(ordered == ['a', 'c', 'b'], "equal keys should keep source order")


@test("order_by_descending with then_by")
def test_order_by_then_by():
    data = P([('b', 1), ('a', 2), ('b', 3), ('a', 1)])
    result = data.order_by_descending(lambda x: x[0]).then_by(lambda x: x[1]).to.list()
    assert_that(result == [('b', 1), ('b', 3), ('a', 1), ('a', 2)], "should sort by letter desc, number asc")


@test("reverse inverts order")
def test_reverse_basic():
    assert_that(numbers.reverse().to.list() == list(range(10, 0, -1)), "should reverse order")


# composition helpers

@test("concat, append and prepend chain lazily")
def test_concat_append_prepend():
    result = numbers.take(3).prepend(0).append(4).concat([5, 6]).to.list()
    assert_that(result == [0, 1, 2, 3, 4, 5, 6], "should handle chained operations")


@test("default_if_empty only fills an empty sequence")
def test_default_if_empty():
    assert_that(empty().default_if_empty(-1).to.list() == [-1], "empty should yield the default")
    assert_that(P([1, 2]).default_if_empty(-1).to.list() == [1, 2], "non-empty should pass through")


# deferred execution

@test("building a pipeline performs no work")
def test_deferred_execution():
    calls = []
    pipeline = numbers.where(lambda x: calls.append(x) or x > 5).select(lambda x: x * 10)
    assert_that(calls == [], "nothing should run before enumeration")
    assert_that(pipeline.to.list() == [60, 70, 80, 90, 100], "should produce results when pulled")
    assert_that(len(calls) == 10, "predicate should have seen every element once")


@test("re-enumeration re-runs the pipeline")
def test_reenumeration():
    runs = []
    pipeline = defer(lambda: runs.append('run') or [1, 2, 3]).select(lambda x: x + 1)
    first = pipeline.to.list()
    second = pipeline.to.list()
    assert_that(first == second == [2, 3, 4], "each pass should see the same results")
    assert_that(runs == ['run', 'run'], "the source factory should be called once per pass")


@test("independent iterators over one pipeline do not interfere")
def test_isolated_enumerations():
    pipeline = from_range(0, 5).select(lambda x: x * 2)
    a, b = iter(pipeline), iter(pipeline)
    assert_that([next(a), next(a)] == [0, 2], "first iterator should advance on its own")
    assert_that(next(b) == 0, "second iterator should start from the beginning")
    assert_that(list(a) == [4, 6, 8], "first iterator should resume where it stopped")


# argument validation and error propagation

@test("missing arguments fail at call time")
def test_eager_validation():
    assert_raises(InvalidArgumentError, lambda: from_iterable(None))
    assert_raises(InvalidArgumentError, lambda: numbers.where(None))
    assert_raises(InvalidArgumentError, lambda: numbers.select(None))
    assert_raises(InvalidArgumentError, lambda: numbers.order_by('not callable'))
    assert_raises(InvalidArgumentError, lambda: numbers.concat(None))


@test("invalid argument errors are value errors")
def test_invalid_argument_is_value_error():
    error = assert_raises(ValueError, lambda: numbers.select_many(None))
    assert_that(isinstance(error, InvalidArgumentError), "should be the library's argument error")
    assert_that(error.name == 'selector', "should name the offending argument")


@test("selector errors propagate and stop enumeration")
def test_callback_error_propagates():
    seen = []

    def explode_on_three(x):
        if x == 3:
            raise KeyError('bad element')
        return x

    def consume():
        for item in numbers.select(explode_on_three):
            seen.append(item)

    assert_raises(KeyError, consume)
    assert_that(seen == [1, 2], "elements before the failure should already have been delivered")


@test("enumerable is the common return type")
def test_enumerable_return_type():
    for stage in (numbers.where(bool), numbers.select(str), numbers.take(1), numbers.skip_while(bool)):
        assert_that(isinstance(stage, Enumerable), "every operator should return an enumerable")


if __name__ == "__main__":
    suite.main(title="sequin core operations test suite")
