"""Spanish and English stopwords, lower-cased and without diacritics."""

SPANISH_STOPWORDS = frozenset(
    """
    a al algo algun alguna algunas alguno algunos ante antes aqui asi aun aunque
    bajo bien cada casi como con contra cual cuales cualquier cuando cuanto de del
    desde donde dos durante e el ella ellas ello ellos en entonces entre era eran
    eres es esa esas ese eso esos esta estaba estaban estado estamos estan estar
    estas este esto estos estoy fue fueron fui ha habia habian haber hace hacen
    hacer hacia han has hasta hay he la las le les lo los mas me mi mis mismo mucho
    muchos muy nada ni no nos nosotros nuestra nuestras nuestro nuestros o os otra
    otras otro otros para pero poco por porque pues que quien quienes se sea sean
    segun ser si sido siempre sin sobre sois solo somos son su sus tal tambien tan
    tanto te tendra tener tiene tienen todo todos tras tu tus un una uno unos usted
    ustedes va van vosotros y ya yo dicho dicha dichos dichas mediante cuya cuyo
    cuyas cuyos luego donde misma mismas mismos puede pueden sera seran seria
    tenia tenian toda todas vez veces
    """.split()
)

ENGLISH_STOPWORDS = frozenset(
    """
    a about above after again against all am an and any are as at be because been
    before being below between both but by can could did do does doing down during
    each few for from further had has have having he her here hers herself him
    himself his how i if in into is it its itself just me more most my myself no nor
    not now of off on once only or other our ours ourselves out over own same she
    should so some such than that the their theirs them themselves then there these
    they this those through to too under until up very was we were what when where
    which while who whom why will with would you your yours yourself yourselves
    also shall upon within without whether however therefore thus hereby herein
    thereof whereas
    """.split()
)

STOPWORDS = SPANISH_STOPWORDS | ENGLISH_STOPWORDS
