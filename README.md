# weatherstats

weatherstats reads a list of cities from a JSON file. For each city it downloads hourly
weather codes and 2 m temperatures from an Open-Meteo style archive API. It then reports three
records:

- `highest_avg_temp`: the city with the highest average temperature
- `hours_with_full_sun`: the city with the most clear-sky hours (weather code 0)
- `hours_with_fog`: the city with the most foggy hours (weather code 45)

Cities are fetched and analysed in one of five execution modes. Each mode arranges producers
(which fetch data) and consumers (which aggregate it) in a different way. A mode can also be
timed over many repetitions.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command

```
weatherstats
weatherstats -profile testing
weatherstats -profile testing -config-dir ./settings
```

- `-profile` / `--profile`: the profile name. Settings are read from
  `<config-dir>/<profile>.json`, and the profile defaults to `dev`.
- `-config-dir` / `--config-dir`: the directory that holds the profiles. It defaults to
  `./config`.

The loaded settings are printed to standard error as indented JSON. If the profile file is
missing or invalid, the error is logged and default settings are used. If the run fails, the
error is logged and the command exits with status 1.

## Configuration

A profile looks like this. JSON keys are matched case-insensitively.

```json
{
  "SourceFileName": "cities.json",
  "APIURL": "https://archive-api.open-meteo.com/v1/archive",
  "LogProducedMsg": false,
  "LogConsumedMsg": false,
  "LogResults": true,
  "AnalysisDurationInMonths": 3,
  "Mode": "mode_4",
  "MockAPI": false,
  "ExecutionRepeatCount": 10,
  "PerformanceTest": false,
  "FilesDirName": "files",
  "ConsumerNumber": 4,
  "ProducerNumber": 4,
  "MaxWorkingProducers": 2
}
```

The weather is requested from `AnalysisDurationInMonths` months before today up to today.

The source file lives in `FilesDirName`. It is a JSON array of city objects. Each object uses the
keys `city`, `lat` and `lng` as strings, plus optional string keys such as `country` and
`population`.

## Modes

| Mode     | Layout                                                                   |
|----------|--------------------------------------------------------------------------|
| `mode_1` | sequential: fetch a city, then aggregate it, one after another           |
| `mode_2` | one producer thread and one consumer thread joined by a queue            |
| `mode_3` | one producer thread and `ConsumerNumber` consumer threads                |
| `mode_4` | `ProducerNumber` producer threads and `ConsumerNumber` consumer threads  |
| `mode_5` | like `mode_4`, but at most `MaxWorkingProducers` fetch at the same time  |

In modes 3 to 5 the record keepers are guarded by a lock. Worker and concurrency counts must be
at least 1. If fetching a city fails, the error is logged and that city is skipped. Any other
mode raises `UnknownModeError`.

## Output

A normal run writes the records as one compact JSON object with sorted keys to a new file in
`FilesDirName`, for example `result_mode_4__4producer_4consumer.json`:

```json
{"highest_avg_temp":{"city_name":"Lisbon","value":17.2},"hours_with_fog":{"city_name":"Porto","value":12},"hours_with_full_sun":{"city_name":"Faro","value":340}}
```

If `PerformanceTest` is true, the mode runs `ExecutionRepeatCount` times. The file then gets
one line per run, an average and a population standard deviation, for example in
`test_mode_4__10times_4producer_4consumer.csv`:

```
execution_1: 1.52s
...
average_execution: 1.48s
standard_deviation: 35.2ms
```

weatherstats refuses to overwrite an existing output file. In that case it raises
`FileExistsError_`.

## Use from Python

```python
from weatherstats.configuration import load_config
from weatherstats.cli import run

cfg = load_config("./config", "dev")
results = run(cfg)  # dict of Result, or None for a performance test
```

`run(cfg, api)` accepts any object that has a
`get_weather(latitude, longitude, weather_tag)` method returning `WeatherStats`. You can use
this to feed it canned data instead of calling the network.

The building blocks can also be used on their own:

- `weatherstats.aggregator.Aggregator`
- `weatherstats.saver.MemorySaver` and the record keepers in `weatherstats.presavers`
- `weatherstats.consumers.MemoryConsumer`
- `weatherstats.producers.ApiProducer`
- `weatherstats.openmeteo.OpenMeteo`
- the runners in `weatherstats.runners`
- `weatherstats.benchmark.Benchmark`

## Limitations

- There is no built-in offline weather service. With `"MockAPI": true`, the command fails. From
  Python, `run` then needs an `api` object passed in.
- The HTTP status of weather responses is not checked. Only the JSON body is decoded.
- If no city could be processed, no average temperature record can be given, and the run raises
  an error.